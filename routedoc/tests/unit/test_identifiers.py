from routedoc.docs.identifiers import DEFAULT_IDS, normalize_ids


def test_single_identifier_becomes_singleton() -> None:
    assert normalize_ids("other") == frozenset({"other"})


def test_collections_are_flattened() -> None:
    assert normalize_ids(["a", "b", "a"]) == frozenset({"a", "b"})
    assert normalize_ids({"a"}) == frozenset({"a"})


def test_missing_values_fall_back_to_default() -> None:
    assert DEFAULT_IDS == frozenset({"default"})
    assert normalize_ids(None) == DEFAULT_IDS
    assert normalize_ids("") == DEFAULT_IDS
    assert normalize_ids([]) == DEFAULT_IDS
    assert normalize_ids([None, ""]) == DEFAULT_IDS


def test_custom_default_and_other_types() -> None:
    assert normalize_ids(None, default=frozenset()) == frozenset()
    assert normalize_ids(7) == frozenset({"7"})
