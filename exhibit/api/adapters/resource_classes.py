from sqlalchemy import false
from sqlalchemy.orm import aliased

from exhibit.api.adapters.entity import AbstractEntityAdapter, reference_id
from exhibit.api.representations.resource_class import ResourceClassRepresentation
from exhibit.db.models import ResourceClass, Vocabulary


class ResourceClassAdapter(AbstractEntityAdapter):
    entity_class = ResourceClass
    representation_class = ResourceClassRepresentation

    def hydrate(self, data, entity, error_store):
        t = self.get_translator()
        if not self.entity_is_persistent(entity):
            owner = self.get_current_user()
            entity.owner_id = owner.id if owner is not None else None

        if "o:vocabulary" in data:
            vocabulary_id = reference_id(data["o:vocabulary"])
            vocabulary = None
            if vocabulary_id is not None:
                vocabulary = self.get_entity_manager().get(Vocabulary, vocabulary_id)
            if vocabulary is None:
                error_store.add_error(
                    "o:vocabulary", t.translate("The vocabulary %s does not exist.") % (vocabulary_id,)
                )
            else:
                entity.vocabulary = vocabulary
        if "o:local_name" in data:
            entity.local_name = self.hydrate_string(data, "o:local_name", error_store)
        if "o:label" in data:
            entity.label = self.hydrate_string(data, "o:label", error_store)
        if "o:comment" in data:
            entity.comment = self.hydrate_string(data, "o:comment", error_store, default=None, strip=False)

    def validate(self, entity, error_store, is_persistent):
        t = self.get_translator()
        if entity.vocabulary is None:
            if "o:vocabulary" not in error_store.get_errors():
                error_store.add_error("o:vocabulary", t.translate("A vocabulary is required."))
        if not entity.local_name:
            error_store.add_error("o:local_name", t.translate("The local name cannot be empty."))
        elif entity.vocabulary is not None and self._local_name_taken(entity, is_persistent):
            error_store.add_error(
                "o:local_name",
                t.translate('The local name "%s" is already taken in this vocabulary.') % entity.local_name,
            )
        if not entity.label:
            error_store.add_error("o:label", t.translate("The label cannot be empty."))

    def _local_name_taken(self, entity, is_persistent) -> bool:
        query = self.get_entity_manager().query(ResourceClass.id).filter(
            ResourceClass.vocabulary_id == entity.vocabulary.id,
            ResourceClass.local_name == entity.local_name,
        )
        if is_persistent:
            query = query.filter(ResourceClass.id != entity.id)
        return query.first() is not None

    def build_query(self, qb, query):
        if query.get("vocabulary_id") not in (None, ""):
            qb.where(ResourceClass.vocabulary_id == self._non_negative_int(query["vocabulary_id"], "vocabulary_id"))
        if query.get("local_name"):
            qb.where(ResourceClass.local_name == query["local_name"])

        if not any(query.get(key) for key in ("vocabulary_prefix", "vocabulary_namespace_uri", "term")):
            return
        vocabulary = aliased(Vocabulary, name=self.get_token())
        qb.join(vocabulary, ResourceClass.vocabulary_id == vocabulary.id, name="vocabulary")
        if query.get("vocabulary_prefix"):
            qb.where(vocabulary.prefix == query["vocabulary_prefix"])
        if query.get("vocabulary_namespace_uri"):
            qb.where(vocabulary.namespace_uri == query["vocabulary_namespace_uri"])
        if query.get("term"):
            prefix, sep, local_name = str(query["term"]).partition(":")
            if not sep:
                qb.where(false())
            else:
                qb.where(vocabulary.prefix == prefix, ResourceClass.local_name == local_name)
