"""Tests for input validation."""

import pytest

from govulners_action.config import ActionInputs
from govulners_action.core.inputs import (
    CREDENTIALS_WARNING,
    build_request,
    parse_bool,
    resolve_credentials,
    resolve_source,
    validate_output_format,
    validate_severity,
)
from govulners_action.errors import ConfigurationError
from govulners_action.models import OutputFormat, Severity, SourceKind


class TestResolveSource:

    @pytest.mark.parametrize("image,path,sbom", [
        ("alpine:3.18", "src", ""),
        ("alpine:3.18", "", "bom.json"),
        ("", "src", "bom.json"),
        ("alpine:3.18", "src", "bom.json"),
    ])
    def test_multiple_sources_rejected(self, image, path, sbom):
        with pytest.raises(ConfigurationError) as exc:
            resolve_source(image, path, sbom)
        assert "image, path, sbom" in str(exc.value)
        assert "mutually exclusive" in str(exc.value)

    def test_defaults_to_current_directory(self):
        source = resolve_source("", "", "")
        assert source.kind == SourceKind.DIRECTORY
        assert source.value == "."
        assert source.argument == "dir:."

    def test_image_passed_through(self):
        source = resolve_source("alpine:3.18", "", "")
        assert source.kind == SourceKind.IMAGE
        assert source.argument == "alpine:3.18"

    def test_sbom_tagged(self):
        source = resolve_source("", "", "bom.json")
        assert source.kind == SourceKind.SBOM
        assert source.value == "bom.json"
        assert source.argument == "sbom:bom.json"

    def test_path_tagged(self):
        assert resolve_source("", "./app", "").argument == "dir:./app"

    def test_path_with_reserved_prefix_keeps_kind(self):
        source = resolve_source("", "sbom:weird", "")
        assert source.kind == SourceKind.DIRECTORY
        assert source.value == "sbom:weird"


class TestValidateSeverity:

    @pytest.mark.parametrize("value", [
        "negligible", "low", "medium", "high", "critical",
        "NEGLIGIBLE", "Low", "MEDIUM", "High", "CriTicaL",
    ])
    def test_known_levels_any_case(self, value):
        assert validate_severity(value) == Severity(value.lower())

    @pytest.mark.parametrize("value", ["unknown", "severe", "hi", "medium ", "0"])
    def test_unknown_levels_rejected(self, value):
        with pytest.raises(ConfigurationError) as exc:
            validate_severity(value)
        message = str(exc.value)
        assert "severity-cutoff" in message
        for level in Severity.names():
            assert level in message

    def test_empty_disables_cutoff(self):
        assert validate_severity("") is None

    def test_levels_are_ordered(self):
        assert Severity.NEGLIGIBLE < Severity.LOW < Severity.MEDIUM < Severity.HIGH < Severity.CRITICAL


class TestValidateOutputFormat:

    @pytest.mark.parametrize("value,expected", [
        ("sarif", OutputFormat.SARIF),
        ("JSON", OutputFormat.JSON),
        ("Table", OutputFormat.TABLE),
    ])
    def test_known_formats(self, value, expected):
        assert validate_output_format(value) == expected

    @pytest.mark.parametrize("value", ["xml", "cyclonedx", ""])
    def test_unknown_formats_rejected(self, value):
        with pytest.raises(ConfigurationError) as exc:
            validate_output_format(value)
        assert "output-format" in str(exc.value)
        assert "sarif, json, table" in str(exc.value)


class TestParseBool:

    @pytest.mark.parametrize("value", ["true", "True", "TRUE"])
    def test_true(self, value):
        assert parse_bool("only-fixed", value) is True

    @pytest.mark.parametrize("value", ["false", "False", "FALSE"])
    def test_false(self, value):
        assert parse_bool("only-fixed", value, default=True) is False

    def test_empty_uses_default(self):
        assert parse_bool("fail-build", "", default=True) is True
        assert parse_bool("only-fixed", "") is False

    @pytest.mark.parametrize("value", ["yes", "1", "tRuE"])
    def test_invalid_rejected(self, value):
        with pytest.raises(ConfigurationError) as exc:
            parse_bool("only-fixed", value)
        assert "only-fixed" in str(exc.value)


class TestResolveCredentials:

    def test_both_set(self):
        credentials, warning = resolve_credentials("user", "secret")
        assert credentials.username == "user"
        assert credentials.password == "secret"
        assert warning is None

    @pytest.mark.parametrize("username,password", [("user", ""), ("", "secret")])
    def test_half_pair_warns_and_drops(self, username, password):
        credentials, warning = resolve_credentials(username, password)
        assert credentials is None
        assert warning == CREDENTIALS_WARNING

    def test_none_set(self):
        assert resolve_credentials("", "") == (None, None)

    def test_password_hidden_from_repr(self):
        credentials, _ = resolve_credentials("user", "hunter2")
        assert "hunter2" not in repr(credentials)


class TestBuildRequest:

    def test_defaults(self):
        request = build_request(ActionInputs())
        assert request.source.argument == "dir:."
        assert request.fail_build is True
        assert request.output_format == OutputFormat.SARIF
        assert request.severity_cutoff == Severity.MEDIUM
        assert request.only_fixed is False
        assert request.add_cpes_if_none is False
        assert request.registry_credentials is None

    def test_full_inputs(self):
        request = build_request(ActionInputs(
            image="registry.io/app:1.0",
            fail_build="false",
            output_format="JSON",
            severity_cutoff="High",
            only_fixed="true",
            add_cpes_if_none="TRUE",
            registry_username="user",
            registry_password="secret",
        ))
        assert request.source.argument == "registry.io/app:1.0"
        assert request.fail_build is False
        assert request.output_format == OutputFormat.JSON
        assert request.severity_cutoff == Severity.HIGH
        assert request.only_fixed is True
        assert request.add_cpes_if_none is True
        assert request.registry_credentials.username == "user"

    def test_empty_severity_allowed(self):
        assert build_request(ActionInputs(severity_cutoff="")).severity_cutoff is None

    def test_invalid_severity_rejected(self):
        with pytest.raises(ConfigurationError):
            build_request(ActionInputs(severity_cutoff="urgent"))

    def test_half_credentials_recorded_as_warning(self):
        request = build_request(ActionInputs(registry_username="user"))
        assert request.registry_credentials is None
        assert request.registry_warning == CREDENTIALS_WARNING

    def test_request_is_immutable(self):
        request = build_request(ActionInputs())
        with pytest.raises(AttributeError):
            request.fail_build = False

    def test_describe_hides_secrets(self):
        request = build_request(ActionInputs(registry_username="user", registry_password="secret"))
        description = request.describe()
        assert description["registry_auth"] is True
        assert "secret" not in str(description)
