from exhibit.api.representations.entity import AbstractEntityRepresentation


class ResourceClassRepresentation(AbstractEntityRepresentation):
    json_ld_type = "o:ResourceClass"

    def get_json_ld(self):
        resource_class = self.data
        return {
            "o:local_name": resource_class.local_name,
            "o:label": resource_class.label,
            "o:comment": resource_class.comment,
            "o:term": resource_class.term,
            "o:vocabulary": self.get_reference(resource_class.vocabulary, "vocabularies"),
            "o:owner": self.get_reference(resource_class.owner, "users"),
        }
