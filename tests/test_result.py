from flowlint.result import CodeDefinition, RuleResult


def make_code(**overrides):
    props = {
        "code": "example-error",
        "message": "Example Rule of flow '%'",
        "recommendation": "Check node '%'.",
        "type": "best-practice",
        "description": "Example Rule Description",
    }
    props.update(overrides)
    return CodeDefinition(**props)


def test_new_result_passes():
    result = RuleResult("example-rule", "Example Rule")

    assert result.passed
    assert result.error_count == 0
    assert result.entries == []
    assert result.flow_id is None
    assert not result.clean


def test_add_error_renders_templates():
    result = RuleResult("example-rule", "Example Rule")
    result.set_flow_id("flow-42")

    entry = result.add_error(make_code(), message_args=["flow-42"], recommendation_args=["n1"])

    assert entry.message == "Example Rule of flow 'flow-42'"
    assert entry.recommendation == "Check node 'n1'."
    assert entry.type == "best-practice"
    assert entry.flow_id == "flow-42"
    assert entry.node_id is None
    assert "node_id" not in entry.to_dict()
    assert result.entries == [entry]
    assert result.error_count == 1
    assert not result.passed


def test_add_error_node_and_flow_override():
    result = RuleResult("example-rule", "Example Rule")
    result.set_flow_id("main")

    entry = result.add_error(make_code(), message_args=["sub"], node_id="n7", flow_id="sub")

    assert entry.flow_id == "sub"
    assert entry.node_id == "n7"
    assert entry.to_dict()["node_id"] == "n7"


def test_missing_type_defaults_to_unknown():
    result = RuleResult("example-rule", "Example Rule")

    entry = result.add_error(make_code(type=""))

    assert entry.type == "unknown-type"


def test_undefined_code_records_internal_error():
    result = RuleResult("example-rule", "Example Rule")
    result.set_flow_id("flow-1")

    entry = result.add_error(None, message_args=["boom"])

    assert entry.code == "ruleId-example-rule"
    assert entry.type == "internal-error"
    assert entry.message == "Unknown Error [ruleId:example-rule]: boom"
    assert entry.recommendation == "Resolve error, exclude or ignore this rule for the flow."
    assert entry.flow_id == "flow-1"
    assert result.error_count == 1
    assert not result.passed


def test_unknown_code_error_is_distinct():
    result = RuleResult("example-rule", "Example Rule")

    unknown = result.add_unknown_code_error("nonexistent-code")
    undefined = result.add_error(None)

    assert unknown.code == "ruleId-example-rule-unknown-code"
    assert unknown.code.endswith("-unknown-code")
    assert unknown.type == "internal-error"
    assert "nonexistent-code" in unknown.message
    assert unknown.code != undefined.code
    assert result.error_count == 2


def test_passed_tracks_error_count():
    result = RuleResult("example-rule", "Example Rule")
    code = make_code()

    for step in range(3):
        result.add_error(code, message_args=[step])
        result.add_unknown_code_error("missing")
        assert result.passed is (result.error_count == 0)
        assert result.passed is False

    assert result.error_count == len(result.entries) == 6
    assert [entry.message for entry in result.entries[::2]] == [
        "Example Rule of flow '0'",
        "Example Rule of flow '1'",
        "Example Rule of flow '2'",
    ]


def test_excluded_codes_do_not_affect_pass_state():
    result = RuleResult("example-rule", "Example Rule")

    result.add_excluded_code("example-error")

    assert result.excluded_codes == ["example-error"]
    assert result.passed
    assert result.error_count == 0
    assert result.entries == []


def test_clean_messages_are_orthogonal_to_errors():
    result = RuleResult("example-rule", "Example Rule")

    result.add_clean("No unused variables")
    result.add_error(make_code())
    result.add_clean("No dangling nodes")

    assert result.clean
    assert result.clean_messages == ["No unused variables", "No dangling nodes"]
    assert not result.passed


def test_to_dict_exports_state():
    result = RuleResult("example-rule", "Example Rule")
    result.set_flow_id("flow-9")
    result.add_error(make_code(), message_args=["flow-9"], node_id="n1")

    data = result.to_dict()

    assert data["passed"] is False
    assert data["error_count"] == 1
    assert data["flow_id"] == "flow-9"
    assert data["entries"][0] == {
        "code": "example-error",
        "message": "Example Rule of flow 'flow-9'",
        "type": "best-practice",
        "recommendation": "Check node '%'.",
        "flow_id": "flow-9",
        "node_id": "n1",
    }
