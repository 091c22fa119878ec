from sqlalchemy import or_

from exhibit.api.adapters.entity import AbstractEntityAdapter, query_bool, reference_id
from exhibit.api.representations.item import ItemRepresentation
from exhibit.db.models import Item, ResourceClass


class ItemAdapter(AbstractEntityAdapter):
    entity_class = Item
    representation_class = ItemRepresentation

    def hydrate(self, data, entity, error_store):
        t = self.get_translator()
        if not self.entity_is_persistent(entity):
            owner = self.get_current_user()
            entity.owner_id = owner.id if owner is not None else None

        if "o:title" in data:
            entity.title = self.hydrate_string(data, "o:title", error_store)
        if "o:is_public" in data:
            entity.is_public = bool(data["o:is_public"])
        elif entity.is_public is None:
            entity.is_public = True

        if "o:resource_class" in data:
            if data["o:resource_class"] is None:
                entity.resource_class = None
            else:
                resource_class_id = reference_id(data["o:resource_class"])
                resource_class = None
                if resource_class_id is not None:
                    resource_class = self.get_entity_manager().get(ResourceClass, resource_class_id)
                if resource_class is None:
                    error_store.add_error(
                        "o:resource_class",
                        t.translate("The resource class %s does not exist.") % (resource_class_id,),
                    )
                else:
                    entity.resource_class = resource_class

    def validate(self, entity, error_store, is_persistent):
        if not entity.title:
            error_store.add_error("o:title", self.get_translator().translate("The title cannot be empty."))

    def build_query(self, qb, query):
        acl = self.get_acl()
        if not acl.user_is_allowed("Item", "view-all"):
            user = self.get_current_user()
            if user is None:
                qb.where(Item.is_public.is_(True))
            else:
                qb.where(or_(Item.is_public.is_(True), Item.owner_id == user.id))

        if query.get("owner_id") not in (None, ""):
            qb.where(Item.owner_id == self._non_negative_int(query["owner_id"], "owner_id"))
        if query.get("resource_class_id") not in (None, ""):
            qb.where(Item.resource_class_id == self._non_negative_int(query["resource_class_id"], "resource_class_id"))
        if query.get("is_public") not in (None, ""):
            qb.where(Item.is_public.is_(query_bool(query["is_public"])))
        if query.get("search"):
            qb.where(Item.title.icontains(str(query["search"]), autoescape=True))
