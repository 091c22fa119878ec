from exhibit.api.representations.entity import AbstractEntityRepresentation


class ItemRepresentation(AbstractEntityRepresentation):
    json_ld_type = "o:Item"

    def get_json_ld(self):
        item = self.data
        json_ld = {
            "o:title": item.title,
            "o:is_public": bool(item.is_public),
            "o:owner": self.get_reference(item.owner, "users"),
            "o:resource_class": self.get_reference(item.resource_class, "resource_classes"),
            "o:created": self.get_date_time(item.created) if item.created else None,
            "o:modified": self.get_date_time(item.modified) if item.modified else None,
        }
        if item.resource_class is not None:
            json_ld["@type"] = [self.json_ld_type, item.resource_class.term]
        return json_ld
