import json
from datetime import datetime, timedelta, timezone

import pytest

from app.application.api import create_user_profile, finalize_assessment, open_assessment
from app.domain.enums import ChoiceLetter, LeadershipFamily, SessionStatus
from app.domain.session import AssessmentStateMachine
from app.infrastructure.checkpoints import (
    FileCheckpointStore,
    InMemoryCheckpointStore,
    create_checkpoint_store,
)
from app.infrastructure.config import AssessmentConfig, reset_settings
from app.infrastructure.exceptions import (
    ConfigurationError,
    UnknownChoiceError,
    UnknownScenarioError,
)


class FakeClock:
    def __init__(self):
        self.now = datetime(2026, 3, 1, 9, 0, tzinfo=timezone.utc)

    def __call__(self):
        self.now += timedelta(seconds=1)
        return self.now


@pytest.fixture
def profile():
    return create_user_profile("ada@example.com", "Ada", "Lovelace", company="Analytical")


@pytest.fixture
def store():
    return InMemoryCheckpointStore()


@pytest.fixture
def machine(profile, store):
    m = AssessmentStateMachine(store=store, clock=FakeClock())
    m.set_user(profile)
    return m


class TestLifecycle:
    def test_initial_state(self):
        m = AssessmentStateMachine()
        assert m.status == SessionStatus.NOT_STARTED
        assert m.progress() == 0
        assert m.current_scenario().id == "scenario-1"

    def test_start_requires_user(self):
        m = AssessmentStateMachine()
        assert m.start() is None
        assert m.status == SessionStatus.NOT_STARTED

    def test_start_opens_session(self, machine, profile):
        session = machine.start()
        assert session.status == SessionStatus.IN_PROGRESS
        assert session.user_id == profile.id
        assert session.started_at is not None
        assert machine.current_scenario_index == 0
        assert session.responses == []

    def test_complete_allows_partial_coverage(self, machine):
        machine.start()
        machine.answer("scenario-1", "C")
        session = machine.complete()
        assert session.status == SessionStatus.COMPLETED
        assert session.completed_at is not None
        assert len(session.responses) == 1

    def test_complete_outside_progress_is_noop(self, machine):
        assert machine.complete() is None
        assert machine.status == SessionStatus.NOT_STARTED

    def test_reset_clears_everything(self, machine, store):
        machine.start()
        machine.answer("scenario-1", "A")
        machine.reset()
        assert machine.user is None
        assert machine.session is None
        assert machine.status == SessionStatus.NOT_STARTED
        assert machine.current_scenario_index == 0
        assert store.get(machine.checkpoint_key) is None


class TestAnswers:
    def test_answer_records_response(self, machine):
        machine.start()
        response = machine.answer("scenario-2", "B")
        assert response.selected_choice == ChoiceLetter.B
        assert machine.is_answered("scenario-2")
        assert machine.session.last_saved_at == response.timestamp
        # answering never moves the cursor
        assert machine.current_scenario_index == 0

    def test_answer_replaces_in_place(self, machine):
        machine.start()
        machine.answer("scenario-1", "A")
        machine.answer("scenario-2", "A")
        machine.answer("scenario-1", "D")
        ids = [r.scenario_id for r in machine.session.responses]
        assert ids == ["scenario-1", "scenario-2"]
        assert machine.response_for("scenario-1").selected_choice == ChoiceLetter.D

    def test_same_answer_keeps_original_response(self, machine):
        machine.start()
        first = machine.answer("scenario-1", "A")
        again = machine.answer("scenario-1", "A")
        assert again is first
        assert len(machine.session.responses) == 1

    def test_answer_before_start_is_ignored(self, machine):
        assert machine.answer("scenario-1", "A") is None
        assert machine.session is None

    def test_unknown_scenario_raises(self, machine):
        machine.start()
        with pytest.raises(UnknownScenarioError):
            machine.answer("scenario-42", "A")
        assert machine.session.responses == []

    def test_unknown_choice_raises(self, machine):
        machine.start()
        with pytest.raises(UnknownChoiceError):
            machine.answer("scenario-1", "Z")

    def test_progress_rounds_half_up(self, machine):
        machine.start()
        for n in range(1, 4):
            machine.answer(f"scenario-{n}", "A")
        assert machine.progress() == 15
        machine.answer("scenario-4", "A")
        assert machine.progress() == 20


class TestNavigation:
    def test_next_and_previous_clamp(self, machine):
        machine.start()
        assert machine.previous() == 0
        assert machine.next() == 1
        assert machine.go_to(50) == 19
        assert machine.next() == 19
        assert machine.go_to(-3) == 0

    def test_navigation_syncs_session(self, machine):
        machine.start()
        machine.go_to(7)
        assert machine.session.current_scenario_index == 7
        assert machine.current_scenario().id == "scenario-8"

    def test_can_proceed_requires_answer(self, machine):
        machine.start()
        assert not machine.can_proceed()
        machine.answer("scenario-1", "C")
        assert machine.can_proceed()


class TestResult:
    def test_finalize_builds_result(self, machine, profile):
        machine.start()
        machine.answer("scenario-1", "C")
        result = finalize_assessment(machine)
        assert result.user_id == profile.id
        assert result.session_id == machine.session.id
        assert result.completed_at == machine.session.completed_at
        assert result.scores.overall.total == 44
        assert result.leadership_family == LeadershipFamily.CONNECTORS

    def test_calculate_result_without_session(self):
        assert AssessmentStateMachine().calculate_result() is None


class TestCheckpointing:
    def test_checkpoint_written_while_in_progress(self, machine, store):
        machine.start()
        machine.answer("scenario-1", "B")
        payload = json.loads(store.get(machine.checkpoint_key))
        assert payload["session"]["status"] == "in_progress"
        assert payload["session"]["responses"][0]["selected_choice"] == "B"
        assert machine.has_saved_progress()

    def test_checkpoint_cleared_on_complete(self, machine, store):
        machine.start()
        machine.answer("scenario-1", "B")
        machine.complete()
        assert store.get(machine.checkpoint_key) is None
        assert not machine.has_saved_progress()

    def test_resume_round_trip(self, machine, store, profile):
        machine.start()
        for n in range(1, 11):
            machine.answer(f"scenario-{n}", "A")
        machine.go_to(10)

        restored = AssessmentStateMachine.restore(store)
        assert restored.user.email == profile.email
        assert restored.status == SessionStatus.IN_PROGRESS
        assert restored.current_scenario_index == 10
        assert len(restored.session.responses) == 10
        assert restored.session.responses == machine.session.responses
        assert restored.progress() == 50

    def test_restore_ignores_corrupt_checkpoint(self, store):
        store.put("equip360_session", "{not json")
        restored = AssessmentStateMachine.restore(store)
        assert restored.session is None
        assert restored.status == SessionStatus.NOT_STARTED

    def _tamper(self, store, edit):
        payload = json.loads(store.get("equip360_session"))
        edit(payload)
        store.put("equip360_session", json.dumps(payload))

    @pytest.fixture
    def answered(self, machine):
        machine.start()
        for n in (1, 2, 3):
            machine.answer(f"scenario-{n}", "A")
        return machine

    def test_restore_ignores_out_of_range_vector(self, answered, store):
        self._tamper(store, lambda p: p["session"]["responses"][0].update(scores=[9, 9]))
        restored = AssessmentStateMachine.restore(store)
        assert restored.status == SessionStatus.NOT_STARTED
        assert restored.user is None
        assert restored.calculate_result() is None

    def test_restore_ignores_duplicate_responses(self, answered, store):
        def duplicate(payload):
            responses = payload["session"]["responses"]
            responses.append(dict(responses[1]))

        self._tamper(store, duplicate)
        assert AssessmentStateMachine.restore(store).session is None

    def test_restore_ignores_responses_outside_catalog(self, answered, store):
        self._tamper(
            store, lambda p: p["session"]["responses"][2].update(scenario_id="scenario-99")
        )
        assert AssessmentStateMachine.restore(store).session is None

    def test_restore_takes_vectors_from_catalog(self, answered, store):
        original = answered.response_for("scenario-1").scores
        self._tamper(store, lambda p: p["session"]["responses"][0].update(scores=[0] * 13))
        restored = AssessmentStateMachine.restore(store)
        assert restored.response_for("scenario-1").scores == original
        assert restored.calculate_result().scores == answered.calculate_result().scores

    def test_restore_clamps_session_index(self, answered, store):
        def jump(payload):
            payload["current_scenario_index"] = 42
            payload["session"]["current_scenario_index"] = 42

        self._tamper(store, jump)
        restored = AssessmentStateMachine.restore(store)
        assert restored.current_scenario_index == 19
        assert restored.session.current_scenario_index == 19

    def test_restore_without_checkpoint(self, store):
        restored = AssessmentStateMachine.restore(store)
        assert restored.session is None

    def test_failing_store_does_not_break_answers(self, profile):
        class BrokenStore(InMemoryCheckpointStore):
            def put(self, key, payload):
                raise OSError("disk full")

        m = AssessmentStateMachine(store=BrokenStore())
        m.set_user(profile)
        m.start()
        assert m.answer("scenario-1", "A") is not None

    def test_file_store_round_trip(self, profile, tmp_path):
        store = FileCheckpointStore(tmp_path / "ckpt")
        m = AssessmentStateMachine(store=store, checkpoint_key="user/ada")
        m.set_user(profile)
        m.start()
        m.answer("scenario-3", "D")
        assert (tmp_path / "ckpt" / "user_ada.json").exists()

        restored = AssessmentStateMachine.restore(store, "user/ada")
        assert restored.response_for("scenario-3").selected_choice == ChoiceLetter.D

        m.complete()
        assert store.get("user/ada") is None


class TestCheckpointStoreFactory:
    def test_memory_backend(self):
        store = create_checkpoint_store(AssessmentConfig(checkpoint_backend="memory"))
        assert isinstance(store, InMemoryCheckpointStore)

    def test_file_backend(self, tmp_path):
        config = AssessmentConfig(checkpoint_backend="file", checkpoint_dir=str(tmp_path))
        assert isinstance(create_checkpoint_store(config), FileCheckpointStore)

    def test_unknown_backend(self):
        config = AssessmentConfig.model_construct(checkpoint_backend="redis")
        with pytest.raises(ConfigurationError):
            create_checkpoint_store(config)


class TestOpenAssessment:
    @pytest.fixture
    def config(self, tmp_path):
        return AssessmentConfig(
            checkpoint_backend="file", checkpoint_dir=str(tmp_path), checkpoint_key="ada"
        )

    def test_starts_new_session(self, profile, config, tmp_path):
        m = open_assessment(profile, config)
        assert m.status == SessionStatus.IN_PROGRESS
        assert m.user.id == profile.id
        m.answer("scenario-2", "C")
        assert (tmp_path / "ada.json").exists()

    def test_resumes_same_user(self, profile, config):
        first = open_assessment(profile, config)
        first.answer("scenario-2", "C")
        first.go_to(5)

        again = open_assessment(profile, config)
        assert again.session.id == first.session.id
        assert again.current_scenario_index == 5
        assert again.response_for("scenario-2").selected_choice == ChoiceLetter.C

    def test_discards_other_users_checkpoint(self, profile, config):
        first = open_assessment(profile, config)
        first.answer("scenario-2", "C")

        grace = create_user_profile("grace@example.com", "Grace", "Hopper")
        m = open_assessment(grace, config)
        assert m.user.id == grace.id
        assert m.session.id != first.session.id
        assert m.session.responses == []

    def test_from_settings_reads_environment(self, profile, monkeypatch, tmp_path):
        monkeypatch.setenv("ASSESSMENT_CHECKPOINT_BACKEND", "file")
        monkeypatch.setenv("ASSESSMENT_CHECKPOINT_DIR", str(tmp_path))
        monkeypatch.setenv("ASSESSMENT_CHECKPOINT_KEY", "from-env")
        reset_settings()
        try:
            m = AssessmentStateMachine.from_settings()
            assert m.checkpoint_key == "from-env"
            assert isinstance(m.store, FileCheckpointStore)
            assert m.session is None
        finally:
            reset_settings()
