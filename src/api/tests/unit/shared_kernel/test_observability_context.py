"""Unit tests for ObservationContext."""

from shared_kernel.observability_context import ObservationContext


class TestObservationContext:
    def test_as_dict_skips_unset_fields(self):
        context = ObservationContext(request_id="req-1")

        assert context.as_dict() == {"request_id": "req-1"}

    def test_as_dict_includes_extra(self):
        context = ObservationContext(space_id="01SPACE", extra={"route": "groups"})

        assert context.as_dict() == {"space_id": "01SPACE", "route": "groups"}

    def test_with_extra_returns_new_context(self):
        context = ObservationContext(actor_id="01MEMBER")

        extended = context.with_extra(group_id="01GROUP")

        assert extended.as_dict() == {"actor_id": "01MEMBER", "group_id": "01GROUP"}
        assert context.extra == {}
