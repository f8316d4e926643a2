"""Step-gated wizard for composing a contract draft."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from rentalshop.core.enums import WizardStep
from rentalshop.models.draft import ContractDraft
from rentalshop.utils.validators import FieldErrors

logger = logging.getLogger(__name__)

StepValidator = Callable[[ContractDraft], FieldErrors]


class InvalidTransitionError(ValueError):
    """Raised when navigation targets a step that does not exist."""


def no_errors(draft: ContractDraft) -> FieldErrors:
    return {}


@dataclass(frozen=True)
class Step:
    step: WizardStep
    validate: StepValidator = no_errors


class WizardController:
    """Finite-state stepper over an ordered list of steps.

    ``current_step`` is the only navigation state. Forward moves run the
    validator of every step being left; backward moves never validate.
    ``errors`` holds the messages of the last failed validation.
    """

    def __init__(self, draft: ContractDraft, steps: Sequence[Step]) -> None:
        if not steps:
            raise ValueError("Wizard needs at least one step.")
        self.draft = draft
        self.steps = tuple(steps)
        self.current_step = 0
        self.errors: FieldErrors = {}

    @property
    def last_step(self) -> int:
        return len(self.steps) - 1

    @property
    def step(self) -> WizardStep:
        return self.steps[self.current_step].step

    def validate_step(self, index: int) -> FieldErrors:
        return self.steps[index].validate(self.draft)

    def _check_target(self, target: int) -> None:
        if not isinstance(target, int) or isinstance(target, bool) or not 0 <= target <= self.last_step:
            raise InvalidTransitionError(f"Step not allowed: {target!r} (0..{self.last_step})")

    def next(self) -> bool:
        errors = self.validate_step(self.current_step)
        if errors:
            self.errors = errors
            logger.info(
                "wizard.step.blocked",
                extra={"event": "wizard.step.blocked", "step": self.step.name, "errors": sorted(errors)},
            )
            return False
        self.errors = {}
        self.current_step = min(self.current_step + 1, self.last_step)
        return True

    def previous(self) -> None:
        self.current_step = max(self.current_step - 1, 0)

    def go_to(self, target: int) -> bool:
        """Jump back freely; jump forward only through valid steps."""
        self._check_target(target)
        if target <= self.current_step:
            self.current_step = target
            return True
        while self.current_step < target:
            if not self.next():
                return False
        return True

    def submit(self) -> bool:
        """Re-validate every step from the first; park on the first failing one."""
        for index in range(len(self.steps)):
            errors = self.validate_step(index)
            if errors:
                self.current_step = index
                self.errors = errors
                logger.info(
                    "wizard.submit.blocked",
                    extra={"event": "wizard.submit.blocked", "step": self.step.name, "errors": sorted(errors)},
                )
                return False
        self.errors = {}
        self.current_step = self.last_step
        return True
