from routedoc.docs.merge import deep_merge, merge_all, strip_keys


def test_nested_mappings_merge_recursively() -> None:
    base = {"responses": {"200": {"description": "OK"}}, "consumes": ["application/json"]}
    override = {"responses": {"401": {"description": "Unauthorized"}}}

    merged = deep_merge(base, override)

    assert merged == {
        "responses": {
            "200": {"description": "OK"},
            "401": {"description": "Unauthorized"},
        },
        "consumes": ["application/json"],
    }


def test_non_mapping_values_are_replaced() -> None:
    merged = deep_merge(
        {"parameters": [{"name": "a"}], "summary": "old", "x": {"nested": 1}},
        {"parameters": [{"name": "b"}], "summary": "new", "x": "flat"},
    )

    assert merged == {"parameters": [{"name": "b"}], "summary": "new", "x": "flat"}


def test_mapping_replaces_scalar() -> None:
    assert deep_merge({"x": 1}, {"x": {"y": 2}}) == {"x": {"y": 2}}


def test_inputs_are_not_mutated() -> None:
    base = {"a": {"b": 1}}
    override = {"a": {"c": 2}}

    merged = deep_merge(base, override)
    merged["a"]["d"] = 3

    assert base == {"a": {"b": 1}}
    assert override == {"a": {"c": 2}}


def test_non_mapping_fragments_are_ignored() -> None:
    assert deep_merge(None, {"a": 1}) == {"a": 1}
    assert deep_merge({"a": 1}, "garbage") == {"a": 1}  # type: ignore[arg-type]


def test_merge_all_folds_left_to_right_and_skips_none() -> None:
    merged = merge_all([{"a": 1}, None, {"a": 2, "b": 1}, {"c": {"d": 1}}])

    assert merged == {"a": 2, "b": 1, "c": {"d": 1}}
    assert list(merged) == ["a", "b", "c"]


def test_strip_keys_returns_copy_without_keys() -> None:
    fragment = {"id": "x", "info": {}, "summary": "kept"}

    assert strip_keys(fragment, {"id", "info"}) == {"summary": "kept"}
    assert fragment == {"id": "x", "info": {}, "summary": "kept"}
    assert strip_keys(None, {"id"}) == {}
