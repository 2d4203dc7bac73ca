from zurihttp.overlay import JOB_KEY, PROCESS_INSTANCE_KEY, ConfigurationOverlay


def test_variables_win_over_environment_variables():
    overlay = ConfigurationOverlay(variables={"x": "job"}, environment_variables={"x": "env"})
    assert overlay.get("x") == "job"
    assert overlay.config["x"] == "job"


def test_custom_headers_win_over_variables():
    overlay = ConfigurationOverlay(
        custom_headers={"x": "header"}, variables={"x": "job"}, environment_variables={"x": "env"}
    )
    assert overlay.get("x") == "header"
    assert overlay.get_string_ignore_case("X") == "header"
    assert overlay.config["x"] == "header"


def test_synthetic_keys_cannot_be_shadowed():
    overlay = ConfigurationOverlay(
        custom_headers={JOB_KEY: "fake"}, variables={PROCESS_INSTANCE_KEY: "fake"}, job_key=1, process_instance_key=2
    )
    assert overlay.get(JOB_KEY) == 1
    assert overlay.config[PROCESS_INSTANCE_KEY] == 2


def test_ignore_case_lookup():
    overlay = ConfigurationOverlay(custom_headers={"KEY": "value"})
    assert overlay.get_string_ignore_case("key") == "value"
    assert overlay.get("key") is None


def test_ignore_case_lookup_respects_precedence():
    overlay = ConfigurationOverlay(variables={"Url": "from-variables"}, environment_variables={"url": "from-env"})
    assert overlay.get_string_ignore_case("URL") == "from-variables"


def test_empty_strings_are_absent():
    overlay = ConfigurationOverlay(variables={"url": ""})
    assert overlay.get("url") == ""
    assert overlay.get_string_ignore_case("url") is None


def test_values_are_converted_to_strings():
    overlay = ConfigurationOverlay(variables={"count": 3, "enabled": True})
    assert overlay.get_string_ignore_case("count") == "3"
    assert overlay.get_string_ignore_case("ENABLED") == "true"


def test_tolerates_missing_sources():
    overlay = ConfigurationOverlay()
    assert overlay.get("anything") is None
    assert set(overlay.config) == {JOB_KEY, PROCESS_INSTANCE_KEY}


def test_sources_are_copied():
    variables = {"x": 1}
    overlay = ConfigurationOverlay(variables=variables)
    variables["x"] = 2
    assert overlay.get("x") == 1


def test_from_invocation(invocation_factory):
    invocation = invocation_factory(custom_headers={"method": "POST"}, variables={"x": 1})
    overlay = ConfigurationOverlay.from_invocation(invocation, {"y": "2"})
    assert overlay.get("method") == "POST"
    assert overlay.get("x") == 1
    assert overlay.get("y") == "2"
    assert overlay.get(JOB_KEY) == invocation.key
