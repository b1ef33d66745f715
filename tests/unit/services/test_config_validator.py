"""
Unit tests for the configuration validator.

These tests exercise the full validation pipeline on wire documents:
error aggregation, canonicalization and advisory notices.
"""

import pytest

from imageregistry_config.errors import ConfigValidationError
from imageregistry_config.models.registry import Config
from imageregistry_config.services.config_validator import (
    is_cluster_config,
    validate_config,
)
from imageregistry_config.settings import settings
from tests.fixtures.registry_configs import (
    empty_dir_config,
    invalid_config,
    minimal_config,
    s3_config,
    with_storage,
)


class TestValidConfigurations:
    """Test cases for configurations that pass validation."""

    def test_minimal_config(self):
        result = validate_config(minimal_config())

        assert result.ok
        assert result.errors == ()
        assert result.notices == ()
        assert result.backend is None
        assert result.config.spec.storage.populated_backends() == []

    def test_complete_s3_config(self):
        result = validate_config(s3_config())

        assert result.ok, result.errors
        assert result.backend == "s3"
        assert result.notices == ()

    def test_accepts_decoded_config(self):
        config = Config.model_validate(s3_config())
        result = validate_config(config)

        assert result.ok
        assert result.config == config

    def test_single_replica_with_empty_dir(self):
        result = validate_config(with_storage({"emptyDir": {}}, replicas=1))

        assert result.ok
        assert result.backend == "emptyDir"

    def test_distinct_route_names(self):
        document = minimal_config()
        document["spec"]["routes"] = [{"name": "public"}, {"name": "internal"}]

        assert validate_config(document).ok

    def test_raise_for_errors_returns_config(self):
        result = validate_config(minimal_config())
        assert result.raise_for_errors() is result.config


class TestCanonicalization:
    """Test the canonical form produced on success."""

    def test_zero_backends_normalize_to_unset(self):
        result = validate_config(with_storage({}))

        assert result.ok
        assert result.selection is None
        assert result.config.to_wire()["spec"]["storage"] == {}

    def test_already_canonical_config_is_unchanged(self):
        first = validate_config(with_storage({"s3": {"bucket": "images"}}))
        second = validate_config(first.config)

        assert first.notices
        assert second.notices == ()
        assert second.config == first.config

    def test_deprecated_flag_migrates_without_notices(self):
        document = with_storage({"managementState": ""})
        document["status"] = {"storageManaged": True}

        result = validate_config(document)

        assert result.ok
        assert result.config.spec.storage.management_state == "Managed"
        assert result.notices == ()

    def test_explicit_storage_state_beats_deprecated_flag(self):
        document = with_storage({"managementState": "Unmanaged"})
        document["status"] = {"storageManaged": True}

        result = validate_config(document)

        assert result.ok
        assert result.config.spec.storage.management_state == "Unmanaged"
        assert [n.code for n in result.notices] == ["DeprecatedFieldConflict"]

    def test_negative_admission_limit_is_clamped(self):
        document = minimal_config()
        document["spec"]["requests"] = {"read": {"maxRunning": -5}}

        result = validate_config(document)

        assert result.ok
        assert result.config.spec.requests.read.max_running == 0
        assert [n.code for n in result.notices] == ["InvalidAdmissionLimit"]

    def test_deprecated_logging_is_preserved(self):
        document = minimal_config()
        document["spec"].update({"logging": 8, "logLevel": "Normal"})

        result = validate_config(document)

        assert result.ok
        assert result.config.spec.logging == 8
        assert result.config.spec.log_level == "Normal"
        assert [n.field for n in result.notices] == ["spec.logging"]

    def test_input_document_is_not_modified(self):
        document = with_storage({"s3": {}}, requests={"read": {"maxRunning": -1}})
        snapshot = Config.model_validate(document)

        result = validate_config(snapshot)

        assert result.config is not snapshot
        assert snapshot.spec.requests.read.max_running == -1
        assert snapshot.spec.storage.s3.virtual_hosted_style is None


class TestFatalErrors:
    """Test cases for rejected configurations."""

    def test_multiple_backends(self):
        result = validate_config(with_storage({"s3": {}, "gcs": {}, "pvc": {}}))

        assert not result.ok
        assert result.config is None
        assert result.error_kinds == ["MultipleBackendsConfigured"]
        assert result.errors[0].backends == ("gcs", "pvc", "s3")

    def test_replicas_exceed_ephemeral_limit(self):
        result = validate_config(with_storage({"emptyDir": {}}, replicas=2))
        assert result.error_kinds == ["ReplicasExceedEphemeralLimit"]

    def test_duplicate_route_names(self):
        document = minimal_config()
        document["spec"]["routes"] = [{"name": "public"}, {"name": "public"}]

        result = validate_config(document)

        assert result.error_kinds == ["DuplicateRouteName"]
        assert result.errors[0].indices == (0, 1)

    def test_invalid_rollout_strategy(self):
        document = minimal_config()
        document["spec"]["rolloutStrategy"] = "BlueGreen"

        assert validate_config(document).error_kinds == ["InvalidRolloutStrategy"]

    def test_missing_management_state_fails_closed(self):
        document = minimal_config()
        del document["spec"]["managementState"]

        assert validate_config(document).error_kinds == ["UnknownManagementState"]

    def test_negative_replicas(self):
        document = minimal_config()
        document["spec"]["replicas"] = -1

        result = validate_config(document)

        assert result.error_kinds == ["InvalidFieldValue"]
        assert result.errors[0].field == "spec.replicas"

    def test_invalid_proxy_and_route_name(self):
        document = minimal_config()
        document["spec"]["proxy"] = {"http": "proxy.example.com:3128", "noProxy": "*"}
        document["spec"]["routes"] = [{"name": "Public_Route"}]

        result = validate_config(document)

        assert [e.field for e in result.errors] == [
            "spec.routes.0.name",
            "spec.proxy.http",
        ]

    def test_invalid_resources(self):
        document = minimal_config()
        document["spec"]["resources"] = {"limits": {"memory": ["1Gi"]}}

        result = validate_config(document)

        assert result.errors[0].field == "spec.resources.limits.memory"

    def test_every_error_is_reported_at_once(self):
        result = validate_config(invalid_config())

        assert result.error_kinds == [
            "UnknownManagementState",
            "UnknownManagementState",
            "InvalidRolloutStrategy",
            "ReplicasExceedEphemeralLimit",
            "DuplicateRouteName",
        ]

    def test_notices_survive_failure(self):
        document = with_storage(
            {"emptyDir": {}}, replicas=2, requests={"write": {"maxInQueue": -3}}
        )

        result = validate_config(document)

        assert not result.ok
        assert [n.code for n in result.notices] == ["InvalidAdmissionLimit"]

    def test_structural_errors_are_collected(self):
        result = validate_config(
            {
                "spec": {
                    "managementState": "Managed",
                    "replicas": "two",
                    "storage": {"s3": {"encrypt": "maybe"}},
                }
            }
        )

        assert result.error_kinds == ["InvalidFieldValue", "InvalidFieldValue"]
        assert {e.field for e in result.errors} == {
            "spec.replicas",
            "spec.storage.s3.encrypt",
        }

    def test_type_errors_do_not_hide_other_errors(self):
        document = minimal_config()
        document["spec"].update(
            {
                "replicas": "two",
                "managementState": "Bogus",
                "routes": [{"name": "public"}, {"name": "public"}],
                "storage": {"s3": {}, "gcs": {}},
            }
        )

        result = validate_config(document)

        assert result.error_kinds == [
            "InvalidFieldValue",
            "UnknownManagementState",
            "MultipleBackendsConfigured",
            "DuplicateRouteName",
        ]
        assert result.errors[0].field == "spec.replicas"

    def test_undecodable_field_is_reported_once(self):
        document = minimal_config()
        document["spec"]["managementState"] = ["Managed"]

        result = validate_config(document)

        assert result.error_kinds == ["InvalidFieldValue"]
        assert result.errors[0].field == "spec.managementState"

    def test_non_mapping_document(self):
        result = validate_config(["not", "a", "config"])

        assert result.config is None
        assert result.error_kinds == ["InvalidFieldValue"]

    @pytest.mark.parametrize("wait", ["99999999999999h", "-400ns", "1500ns"])
    def test_unrepresentable_wait_duration(self, wait):
        document = minimal_config()
        document["spec"]["requests"] = {"read": {"maxWaitInQueue": wait}}

        result = validate_config(document)

        assert result.error_kinds == ["InvalidFieldValue"]
        assert result.errors[0].field == "spec.requests.read.maxWaitInQueue"

    def test_null_storage_is_empty(self):
        document = minimal_config()
        document["spec"]["storage"] = None

        result = validate_config(document)

        assert result.ok
        assert result.backend is None

    def test_raise_for_errors(self):
        result = validate_config(invalid_config())

        with pytest.raises(ConfigValidationError) as exc_info:
            result.raise_for_errors()

        assert exc_info.value.kinds == result.error_kinds
        assert "5 configuration error(s)" in str(exc_info.value)

    def test_empty_dir_fixture_is_valid(self):
        assert validate_config(empty_dir_config()).ok


class TestClusterConfig:
    """Test singleton name matching."""

    def test_default_name(self):
        assert is_cluster_config(Config.model_validate(minimal_config()))

    def test_other_name(self):
        document = minimal_config()
        document["metadata"]["name"] = "secondary"

        assert not is_cluster_config(Config.model_validate(document))

    def test_name_from_settings(self, monkeypatch):
        monkeypatch.setattr(settings, "config_name", "secondary")
        document = minimal_config()
        document["metadata"]["name"] = "secondary"

        assert is_cluster_config(Config.model_validate(document))
