import pytest

from dispatchbot.dispatch import DispatchConfigError, EventKind, InboundEvent, Param, ParameterError, ParamType, UserRef


def _event(**options):
    return InboundEvent(
        EventKind.SLASH_COMMAND,
        identifier="cmd",
        options=options,
        users={"5": UserRef(id=5, name="grace")},
    )


@pytest.mark.parametrize(
    "param, raw, expected",
    [
        (Param("v", ParamType.STRING), "Pear", "Pear"),
        (Param("v", ParamType.STRING), "", ""),
        (Param("v", ParamType.INTEGER), 12, 12),
        (Param("v", ParamType.INTEGER), "12", 12),
        (Param("v", ParamType.INTEGER), 3.0, 3),
        (Param("v", ParamType.BOOLEAN), True, True),
        (Param("v", ParamType.BOOLEAN), "false", False),
        (Param("v", ParamType.USER), "5", UserRef(id=5, name="grace")),
    ],
)
def test_extract_coerces_to_declared_type(param, raw, expected):
    assert param.extract(_event(v=raw)) == expected


@pytest.mark.parametrize(
    "param, raw",
    [
        (Param("v", ParamType.STRING), 3),
        (Param("v", ParamType.INTEGER), "three"),
        (Param("v", ParamType.INTEGER), True),
        (Param("v", ParamType.INTEGER), 1.9),
        (Param("v", ParamType.BOOLEAN), "yes"),
        (Param("v", ParamType.USER), "404"),
    ],
)
def test_extract_rejects_mismatched_values(param, raw):
    with pytest.raises(ParameterError):
        param.extract(_event(v=raw))


def test_missing_value_depends_on_required_flag():
    assert Param("v", required=False).extract(_event()) is None

    with pytest.raises(ParameterError, match="Required option 'v'"):
        Param("v", required=True).extract(_event())

    # Unresolved against a schema: treated as required
    with pytest.raises(ParameterError):
        Param("v").extract(_event())


def test_param_type_accepts_string_value():
    assert Param("v", "integer").type is ParamType.INTEGER


def test_user_display_name_prefers_nick_then_global_name():
    assert UserRef(1, "acct", "Global", "Nick").display_name == "Nick"
    assert UserRef(1, "acct", "Global").display_name == "Global"
    assert UserRef(1, "acct").display_name == "acct"


@pytest.mark.parametrize("type_name", ["float", "number", "channel"])
def test_unsupported_param_type_is_a_config_error(type_name):
    with pytest.raises(DispatchConfigError, match="Unsupported parameter type"):
        Param("v", type_name)
