"""
Assessment session state machine.

Drives one respondent through the scenario catalog:

    not_started --start--> in_progress --complete--> completed
         ^                                               |
         +-------------------- reset --------------------+

Answers are upserted by scenario id and never move the cursor; navigation
clamps to the catalog bounds instead of raising. While a session is in
progress every mutation is checkpointed to the resumability store so the
assessment can be picked up after an interruption.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable
from datetime import datetime

from pydantic import ValidationError as PydanticValidationError

from ..infrastructure.checkpoints import CheckpointStore, create_checkpoint_store
from ..infrastructure.config import AssessmentConfig, get_settings
from ..infrastructure.exceptions import UnknownChoiceError, UnknownScenarioError
from ..infrastructure.logging import get_logger
from .enums import ChoiceLetter, SessionStatus
from .models import AssessmentResult, AssessmentSession, Response, Scenario, UserProfile, utcnow
from .scenarios import ScenarioCatalog, get_catalog
from .schemas import SessionCheckpoint, SessionRecord, UserProfileRecord
from .services import ScoringService, round_half_up

DEFAULT_CHECKPOINT_KEY = "equip360_session"


class AssessmentStateMachine:
    def __init__(
        self,
        catalog: ScenarioCatalog | None = None,
        store: CheckpointStore | None = None,
        checkpoint_key: str = DEFAULT_CHECKPOINT_KEY,
        scoring: ScoringService | None = None,
        clock: Callable[[], datetime] = utcnow,
        logger: logging.Logger | None = None,
    ):
        self.catalog = catalog or get_catalog()
        self.store = store
        self.checkpoint_key = checkpoint_key
        self.scoring = scoring or ScoringService()
        self.clock = clock
        self.logger = logger or get_logger(__name__)

        self.user: UserProfile | None = None
        self.session: AssessmentSession | None = None
        self.current_scenario_index = 0
        self.result: AssessmentResult | None = None

    # ---------- State ----------

    @property
    def status(self) -> SessionStatus:
        if self.session is None:
            return SessionStatus.NOT_STARTED
        return self.session.status

    @property
    def in_progress(self) -> bool:
        return self.status == SessionStatus.IN_PROGRESS

    def _clamp(self, index: int) -> int:
        return max(0, min(index, len(self.catalog) - 1))

    def _move_to(self, index: int) -> None:
        self.current_scenario_index = self._clamp(index)
        if self.session is not None:
            self.session.current_scenario_index = self.current_scenario_index
        self._checkpoint()

    # ---------- Transitions ----------

    def set_user(self, profile: UserProfile) -> None:
        self.user = profile
        self._checkpoint()

    def start(self) -> AssessmentSession | None:
        """Open a new in-progress session. Requires a user profile."""
        if self.user is None:
            self.logger.warning("Cannot start an assessment without a user profile")
            return None

        self.session = AssessmentSession(
            id=str(uuid.uuid4()),
            user_id=self.user.id,
            status=SessionStatus.IN_PROGRESS,
            started_at=self.clock(),
        )
        self.current_scenario_index = 0
        self.result = None
        self.logger.info("Started assessment session %s for user %s", self.session.id, self.user.id)
        self._checkpoint()
        return self.session

    def resume(self, session: AssessmentSession) -> None:
        self.session = session
        self.current_scenario_index = self._clamp(session.current_scenario_index)
        session.current_scenario_index = self.current_scenario_index
        self.result = None
        self.logger.info(
            "Resumed session %s at scenario index %d with %d responses",
            session.id,
            self.current_scenario_index,
            len(session.responses),
        )
        self._checkpoint()

    def answer(self, scenario_id: str, choice: ChoiceLetter | str) -> Response | None:
        """
        Record the answer for ``scenario_id``, replacing any earlier answer in place.

        Unknown scenarios or choices raise before anything changes. Outside an
        in-progress session this is a no-op. The cursor does not move.
        """
        picked = self.catalog.choice(scenario_id, choice)

        if not self.in_progress or self.session is None:
            self.logger.debug("Ignoring answer for %s: session is %s", scenario_id, self.status)
            return None

        now = self.clock()
        responses = self.session.responses
        for i, existing in enumerate(responses):
            if existing.scenario_id != scenario_id:
                continue
            if existing.selected_choice != picked.letter:
                responses[i] = Response(scenario_id, picked.letter, picked.scores, now)
            response = responses[i]
            break
        else:
            response = Response(scenario_id, picked.letter, picked.scores, now)
            responses.append(response)

        self.session.last_saved_at = now
        self._checkpoint()
        return response

    def next(self) -> int:
        self._move_to(self.current_scenario_index + 1)
        return self.current_scenario_index

    def previous(self) -> int:
        self._move_to(self.current_scenario_index - 1)
        return self.current_scenario_index

    def go_to(self, index: int) -> int:
        self._move_to(index)
        return self.current_scenario_index

    def complete(self) -> AssessmentSession | None:
        """Close the session. Partial coverage is allowed."""
        if not self.in_progress or self.session is None:
            self.logger.debug("Ignoring complete: session is %s", self.status)
            return None

        self.session.status = SessionStatus.COMPLETED
        self.session.completed_at = self.clock()
        self.logger.info(
            "Completed session %s with %d/%d responses",
            self.session.id,
            len(self.session.responses),
            len(self.catalog),
        )
        self._clear_checkpoint()
        return self.session

    def reset(self) -> None:
        self.user = None
        self.session = None
        self.current_scenario_index = 0
        self.result = None
        self._clear_checkpoint()

    def calculate_result(self) -> AssessmentResult | None:
        if self.session is None or self.user is None:
            return None
        self.result = self.scoring.build_result(self.session, self.user)
        return self.result

    # ---------- Queries ----------

    def current_scenario(self) -> Scenario | None:
        if 0 <= self.current_scenario_index < len(self.catalog):
            return self.catalog[self.current_scenario_index]
        return None

    def progress(self) -> int:
        """Answered scenarios as a rounded percentage of the catalog."""
        if self.session is None:
            return 0
        return round_half_up(len(self.session.responses) * 100, len(self.catalog))

    def response_for(self, scenario_id: str) -> Response | None:
        if self.session is None:
            return None
        for response in self.session.responses:
            if response.scenario_id == scenario_id:
                return response
        return None

    def is_answered(self, scenario_id: str) -> bool:
        return self.response_for(scenario_id) is not None

    def can_proceed(self) -> bool:
        scenario = self.current_scenario()
        return scenario is not None and self.is_answered(scenario.id)

    def has_saved_progress(self) -> bool:
        return bool(self.in_progress and self.session and self.session.responses)

    # ---------- Checkpointing ----------

    def to_checkpoint(self) -> SessionCheckpoint:
        return SessionCheckpoint(
            user=UserProfileRecord.from_domain(self.user) if self.user else None,
            session=SessionRecord.from_domain(self.session) if self.session else None,
            current_scenario_index=self.current_scenario_index,
        )

    def _checkpoint(self) -> None:
        if self.store is None or not self.in_progress:
            return
        try:
            self.store.put(self.checkpoint_key, self.to_checkpoint().model_dump_json())
        except Exception:
            self.logger.warning(
                "Failed to checkpoint session %s",
                self.session.id if self.session else None,
                exc_info=True,
            )

    def _clear_checkpoint(self) -> None:
        if self.store is None:
            return
        try:
            self.store.delete(self.checkpoint_key)
        except Exception:
            self.logger.warning("Failed to clear checkpoint %s", self.checkpoint_key, exc_info=True)

    def _from_catalog(self, response: Response) -> Response:
        picked = self.catalog.choice(response.scenario_id, response.selected_choice)
        return Response(response.scenario_id, picked.letter, picked.scores, response.timestamp)

    @classmethod
    def from_settings(
        cls, config: AssessmentConfig | None = None, **kwargs
    ) -> AssessmentStateMachine:
        """Restore the configured checkpoint, or start fresh when there is none."""
        config = config or get_settings().assessment
        return cls.restore(create_checkpoint_store(config), config.checkpoint_key, **kwargs)

    @classmethod
    def restore(
        cls,
        store: CheckpointStore,
        checkpoint_key: str = DEFAULT_CHECKPOINT_KEY,
        **kwargs,
    ) -> AssessmentStateMachine:
        """
        Rebuild a machine from the resumability store.

        A missing or unreadable checkpoint yields a fresh machine.
        """
        machine = cls(store=store, checkpoint_key=checkpoint_key, **kwargs)
        try:
            payload = store.get(checkpoint_key)
        except Exception:
            machine.logger.warning("Failed to read checkpoint %s", checkpoint_key, exc_info=True)
            return machine
        if payload is None:
            return machine

        try:
            checkpoint = SessionCheckpoint.model_validate_json(payload)
        except PydanticValidationError:
            machine.logger.warning("Ignoring corrupt checkpoint %s", checkpoint_key, exc_info=True)
            return machine

        session = None
        if checkpoint.session is not None:
            session = checkpoint.session.to_domain()
            try:
                session.responses = [machine._from_catalog(r) for r in session.responses]
            except (UnknownScenarioError, UnknownChoiceError):
                machine.logger.warning(
                    "Ignoring corrupt checkpoint %s", checkpoint_key, exc_info=True
                )
                return machine

        if checkpoint.user is not None:
            machine.user = checkpoint.user.to_domain()
        if session is not None:
            machine.session = session
            machine.current_scenario_index = machine._clamp(checkpoint.current_scenario_index)
            session.current_scenario_index = machine.current_scenario_index
        machine.logger.info("Restored checkpoint %s", checkpoint_key)
        return machine
