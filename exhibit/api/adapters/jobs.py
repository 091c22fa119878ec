"""Read-only adapter over background job records."""
from sqlalchemy import false

from exhibit.api.adapters.entity import AbstractEntityAdapter
from exhibit.api.request import Request
from exhibit.api.representations.job import JobRepresentation
from exhibit.db.models import Job


class JobAdapter(AbstractEntityAdapter):
    entity_class = Job
    representation_class = JobRepresentation

    def create(self, request):
        raise self._not_implemented(Request.CREATE)

    def batch_create(self, request):
        raise self._not_implemented(Request.BATCH_CREATE)

    def update(self, request):
        raise self._not_implemented(Request.UPDATE)

    def delete(self, request):
        raise self._not_implemented(Request.DELETE)

    def hydrate(self, data, entity, error_store):
        raise self._not_implemented("hydrate")

    def validate(self, entity, error_store, is_persistent):
        raise self._not_implemented("validate")

    def build_query(self, qb, query):
        if not self.get_acl().user_is_allowed("Job", "view-all"):
            user = self.get_current_user()
            qb.where(Job.owner_id == user.id if user is not None else false())
        if query.get("status"):
            qb.where(Job.status == query["status"])
        if query.get("class"):
            qb.where(Job.job_class == query["class"])
        if query.get("owner_id") not in (None, ""):
            qb.where(Job.owner_id == self._non_negative_int(query["owner_id"], "owner_id"))
