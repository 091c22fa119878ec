from exhibit.api.representations.entity import AbstractEntityRepresentation


class VocabularyRepresentation(AbstractEntityRepresentation):
    json_ld_type = "o:Vocabulary"

    def get_json_ld(self):
        vocabulary = self.data
        return {
            "o:namespace_uri": vocabulary.namespace_uri,
            "o:prefix": vocabulary.prefix,
            "o:label": vocabulary.label,
            "o:comment": vocabulary.comment,
            "o:owner": self.get_reference(vocabulary.owner, "users"),
        }
