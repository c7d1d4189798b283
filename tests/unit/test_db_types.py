from sqlalchemy.dialects import postgresql, sqlite

from woodys.db.types import StringList, StringSet


def test_string_set_bind_normalizes():
    t = StringSet()
    d = sqlite.dialect()
    assert t.process_bind_param([" pine", "oak", "oak", ""], d) == ["oak", "pine"]
    assert t.process_bind_param(None, d) == []


def test_string_set_result_parses_json_text():
    t = StringSet()
    d = sqlite.dialect()
    assert t.process_result_value('["walnut", "ash"]', d) == ["ash", "walnut"]
    assert t.process_result_value(None, d) == []


def test_string_set_uses_jsonb_on_postgres():
    impl = StringSet().load_dialect_impl(postgresql.dialect())
    assert isinstance(impl, postgresql.JSONB)


def test_string_list_keeps_order_and_duplicates():
    t = StringList()
    d = sqlite.dialect()
    assert t.process_bind_param(["b.jpg", "a.jpg", "b.jpg"], d) == ["b.jpg", "a.jpg", "b.jpg"]
    assert t.process_result_value('["x.png"]', d) == ["x.png"]
