"""Unit tests for StateMachine."""

import pytest

from trendpress.core.state_machine import InvalidTransitionError, StateMachine
from trendpress.services.pipeline.orchestrator import STAGE_TRANSITIONS
from trendpress.services.pipeline.schemas import PipelineStage


class TestStateMachine:
    """Tests for generic StateMachine."""

    @pytest.fixture
    def state_machine(self):
        """Create state machine with simple transitions."""
        return StateMachine(
            "start",
            {
                "start": ["middle", "end"],
                "middle": ["end"],
                "end": [],
            },
        )

    def test_initial_state(self, state_machine):
        """Test that initial state is set correctly."""
        assert state_machine.current == "start"

    def test_can_transition(self, state_machine):
        """Test can_transition for valid and unknown targets."""
        assert state_machine.can_transition("middle") is True
        assert state_machine.can_transition("nonexistent") is False

    def test_transition_to_returns_state(self, state_machine):
        """Test transition_to returns new state."""
        assert state_machine.transition_to("middle") == "middle"
        assert state_machine.current == "middle"

    def test_transition_invalid_raises(self, state_machine):
        """Test invalid transition raises error."""
        state_machine.transition_to("middle")

        with pytest.raises(InvalidTransitionError) as exc_info:
            state_machine.transition_to("start")

        assert exc_info.value.current == "middle"
        assert exc_info.value.target == "start"
        assert exc_info.value.allowed == ["end"]

    def test_reset_bypasses_validation(self, state_machine):
        """Test reset allows setting any state."""
        state_machine.transition_to("end")
        state_machine.reset("start")
        assert state_machine.current == "start"


class TestPipelineStages:
    """Tests for the pipeline stage transition map."""

    def test_full_walk(self):
        """Test the normal stage order is accepted."""
        sm = StateMachine(PipelineStage.IDLE, STAGE_TRANSITIONS)
        for stage in (
            PipelineStage.COLLECT,
            PipelineStage.FILTER_PERSIST,
            PipelineStage.SELECT_UNPROCESSED,
            PipelineStage.PROCESS_EACH,
            PipelineStage.FINALIZE,
            PipelineStage.IDLE,
        ):
            sm.transition_to(stage)
        assert sm.current == PipelineStage.IDLE

    def test_finalize_reachable_after_early_stages(self):
        """Test an empty selection can go straight to FINALIZE."""
        sm = StateMachine(PipelineStage.IDLE, STAGE_TRANSITIONS)
        sm.transition_to(PipelineStage.COLLECT)
        sm.transition_to(PipelineStage.FILTER_PERSIST)
        sm.transition_to(PipelineStage.SELECT_UNPROCESSED)
        sm.transition_to(PipelineStage.FINALIZE)
        assert sm.current == PipelineStage.FINALIZE

    def test_cannot_skip_collect(self):
        """Test stages cannot be entered out of order."""
        sm = StateMachine(PipelineStage.IDLE, STAGE_TRANSITIONS)
        with pytest.raises(InvalidTransitionError):
            sm.transition_to(PipelineStage.PROCESS_EACH)
