"""Custom ORM lookups.

``tags__any_icontains="conf"`` matches rows whose JSON array holds at least
one string element containing the value, case-insensitively. Elements are
matched one by one, never the serialized array text.
"""

from django.db import NotSupportedError
from django.db.models import JSONField, Lookup


@JSONField.register_lookup
class AnyElementIContains(Lookup):
    lookup_name = "any_icontains"
    prepare_rhs = False

    def _pattern(self, connection) -> str:
        return f"%{connection.ops.prep_for_like_query(self.rhs)}%"

    def as_sql(self, compiler, connection):
        raise NotSupportedError(f"{self.lookup_name} is not supported on {connection.vendor}")

    def as_sqlite(self, compiler, connection):
        lhs, lhs_params = self.process_lhs(compiler, connection)
        sql = (
            f"EXISTS (SELECT 1 FROM json_each({lhs}) AS element "
            f"WHERE element.type = 'text' AND element.value LIKE %s ESCAPE '\\')"
        )
        return sql, (*lhs_params, self._pattern(connection))

    def as_postgresql(self, compiler, connection):
        lhs, lhs_params = self.process_lhs(compiler, connection)
        sql = (
            f"EXISTS (SELECT 1 FROM jsonb_array_elements_text({lhs}) AS element(value) "
            f"WHERE UPPER(element.value) LIKE UPPER(%s))"
        )
        return sql, (*lhs_params, self._pattern(connection))
