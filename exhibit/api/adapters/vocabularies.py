from exhibit.api.adapters.entity import AbstractEntityAdapter
from exhibit.api.representations.vocabulary import VocabularyRepresentation
from exhibit.db.models import Vocabulary


class VocabularyAdapter(AbstractEntityAdapter):
    entity_class = Vocabulary
    representation_class = VocabularyRepresentation

    def hydrate(self, data, entity, error_store):
        if not self.entity_is_persistent(entity):
            owner = self.get_current_user()
            entity.owner_id = owner.id if owner is not None else None
        if "o:namespace_uri" in data:
            entity.namespace_uri = self.hydrate_string(data, "o:namespace_uri", error_store)
        if "o:prefix" in data:
            entity.prefix = self.hydrate_string(data, "o:prefix", error_store)
        if "o:label" in data:
            entity.label = self.hydrate_string(data, "o:label", error_store)
        if "o:comment" in data:
            entity.comment = self.hydrate_string(data, "o:comment", error_store, default=None, strip=False)

    def validate(self, entity, error_store, is_persistent):
        t = self.get_translator()
        if not entity.namespace_uri:
            error_store.add_error("o:namespace_uri", t.translate("The namespace URI cannot be empty."))
        elif self._is_taken(Vocabulary.namespace_uri, entity.namespace_uri, entity, is_persistent):
            error_store.add_error(
                "o:namespace_uri",
                t.translate('The namespace URI "%s" is already taken.') % entity.namespace_uri,
            )
        if not entity.prefix:
            error_store.add_error("o:prefix", t.translate("The prefix cannot be empty."))
        elif self._is_taken(Vocabulary.prefix, entity.prefix, entity, is_persistent):
            error_store.add_error(
                "o:prefix", t.translate('The prefix "%s" is already taken.') % entity.prefix
            )
        if not entity.label:
            error_store.add_error("o:label", t.translate("The label cannot be empty."))

    def _is_taken(self, column, value, entity, is_persistent) -> bool:
        query = self.get_entity_manager().query(Vocabulary.id).filter(column == value)
        if is_persistent:
            query = query.filter(Vocabulary.id != entity.id)
        return query.first() is not None

    def build_query(self, qb, query):
        if query.get("namespace_uri"):
            qb.where(Vocabulary.namespace_uri == query["namespace_uri"])
        if query.get("prefix"):
            qb.where(Vocabulary.prefix == query["prefix"])
        if query.get("owner_id") not in (None, ""):
            qb.where(Vocabulary.owner_id == self._non_negative_int(query["owner_id"], "owner_id"))
