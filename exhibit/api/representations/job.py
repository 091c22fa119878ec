from exhibit.api.representations.entity import AbstractEntityRepresentation


class JobRepresentation(AbstractEntityRepresentation):
    json_ld_type = "o:Job"

    def get_json_ld(self):
        job = self.data
        return {
            "o:status": job.status,
            "o:job_class": job.job_class,
            "o:args": job.args,
            "o:pid": job.pid,
            "o:owner": self.get_reference(job.owner, "users"),
            "o:started": self.get_date_time(job.started) if job.started else None,
            "o:stopped": self.get_date_time(job.stopped) if job.stopped else None,
        }
