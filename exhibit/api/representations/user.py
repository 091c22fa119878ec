from exhibit.api.representations.entity import AbstractEntityRepresentation


class UserRepresentation(AbstractEntityRepresentation):
    json_ld_type = "o:User"

    def get_json_ld(self):
        user = self.data
        return {
            "o:email": user.email,
            "o:name": user.name,
            "o:role": user.role,
            "o:is_active": bool(user.is_active),
            "o:created": self.get_date_time(user.created) if user.created else None,
            "o:modified": self.get_date_time(user.modified) if user.modified else None,
        }
