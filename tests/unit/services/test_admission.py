"""Unit tests for request admission limit clamping."""

from datetime import timedelta

from imageregistry_config.models.requests import RequestLimits, RequestsConfig
from imageregistry_config.services.admission import clamp_limits, normalize_requests


class TestClampLimits:
    """Test cases for one limit triple."""

    def test_negative_max_running_is_clamped(self):
        limits, notices = clamp_limits(
            RequestLimits(max_running=-5), "spec.requests.read"
        )

        assert limits.max_running == 0
        assert len(notices) == 1
        assert notices[0].code == "InvalidAdmissionLimit"
        assert notices[0].field == "spec.requests.read.maxRunning"

    def test_every_negative_member_is_flagged(self):
        limits, notices = clamp_limits(
            RequestLimits(
                max_running=-1,
                max_in_queue=-2,
                max_wait_in_queue=timedelta(seconds=-5),
            ),
            "spec.requests.write",
        )

        assert limits == RequestLimits(
            max_running=0, max_in_queue=0, max_wait_in_queue=timedelta(0)
        )
        assert [n.field.rsplit(".", 1)[-1] for n in notices] == [
            "maxRunning",
            "maxInQueue",
            "maxWaitInQueue",
        ]
        assert "-5s" in notices[2].message

    def test_valid_limits_are_returned_unchanged(self):
        original = RequestLimits(max_running=10, max_in_queue=0)
        limits, notices = clamp_limits(original, "spec.requests.read")

        assert limits is original
        assert notices == []

    def test_unset_limits(self):
        assert clamp_limits(None, "spec.requests.read") == (None, [])


class TestNormalizeRequests:
    """Test cases for both triples together."""

    def test_unset_requests(self):
        normalized = normalize_requests(None)
        assert normalized.requests is None
        assert normalized.notices == ()

    def test_only_the_negative_side_changes(self):
        requests = RequestsConfig(
            read=RequestLimits(max_running=-5),
            write=RequestLimits(max_running=3),
        )

        normalized = normalize_requests(requests)

        assert normalized.requests.read.max_running == 0
        assert normalized.requests.write is requests.write
        assert requests.read.max_running == -5
        assert len(normalized.notices) == 1
