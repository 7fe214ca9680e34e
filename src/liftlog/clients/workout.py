"""Interactive prompts for logging an active workout."""

import click
import questionary
from questionary import Style

from ..models.exercise import Exercise, group_by_category
from ..models.session import WorkoutSession, format_elapsed
from ..models.settings import WeightUnit

# Custom style for prompts
custom_style = Style(
    [
        ("qmark", "fg:#673ab7 bold"),
        ("question", "bold"),
        ("answer", "fg:#f44336 bold"),
        ("pointer", "fg:#673ab7 bold"),
        ("highlighted", "fg:#673ab7 bold"),
        ("selected", "fg:#cc5454"),
        ("separator", "fg:#cc5454"),
        ("instruction", ""),
        ("text", ""),
    ]
)

LOG_SET = "log"
ADD_EXERCISE = "add_exercise"
ADD_SET = "add_set"
REMOVE_SET = "remove_set"
FINISH = "finish"
DISCARD = "discard"


def _is_number(text: str) -> bool | str:
    """Validator that accepts blanks and non-negative numbers."""
    if not text.strip():
        return True
    try:
        return float(text) >= 0 or "Enter a non-negative number"
    except ValueError:
        return "Enter a number"


def _is_whole_number(text: str) -> bool | str:
    """Validator that accepts blanks and non-negative integers."""
    if not text.strip():
        return True
    return text.strip().isdigit() or "Enter a whole number"


class InteractiveWorkoutClient:
    """Drives a ``WorkoutSession`` from terminal prompts.

    The client only edits the draft. Saving is left to the caller so the
    prompts stay independent of the store.
    """

    def __init__(self, exercises: list[Exercise], unit: WeightUnit = WeightUnit.LBS):
        self.exercises = exercises
        self.unit = unit

    def render(self, session: WorkoutSession) -> None:
        """Print the current state of the workout."""
        click.echo()
        click.echo(
            click.style("Active workout", bold=True)
            + f"  {format_elapsed(int(session.elapsed().total_seconds()))}"
        )
        if not session.exercises:
            click.echo("  No exercises yet.")
        for draft in session.exercises:
            click.echo(f"  {draft.exercise.name}")
            for number, s in enumerate(draft.sets, start=1):
                mark = click.style("x", fg="green") if s.completed else " "
                weight = s.weight or "-"
                reps = s.reps or "-"
                warmup = " W" if s.is_warmup else ""
                click.echo(f"    [{mark}] {number}. {weight} {self.unit.value} x {reps}{warmup}")
        click.echo()

    async def run(self, session: WorkoutSession) -> WorkoutSession | None:
        """Prompt until the user finishes or discards.

        Returns:
            The session to finish, or None if the workout was discarded
        """
        while True:
            self.render(session)
            action = await questionary.select(
                "What next?",
                choices=self._actions(session),
                style=custom_style,
            ).ask_async()

            if action is None or action == DISCARD:
                if await questionary.confirm(
                    "Discard this workout?", default=False, style=custom_style
                ).ask_async():
                    return None
            elif action == FINISH:
                return session
            elif action == ADD_EXERCISE:
                session = await self._add_exercises(session)
            elif action == LOG_SET:
                session = await self._log_set(session)
            elif action == ADD_SET:
                index = await self._pick_exercise(session)
                if index is not None:
                    session = session.add_set(index)
            elif action == REMOVE_SET:
                session = await self._remove_set(session)

    def _actions(self, session: WorkoutSession) -> list[questionary.Choice]:
        choices = []
        if session.exercises:
            choices.append(questionary.Choice("Log a set", LOG_SET))
            choices.append(questionary.Choice("Add a set row", ADD_SET))
            choices.append(questionary.Choice("Remove a set row", REMOVE_SET))
        choices.append(questionary.Choice("Add exercises", ADD_EXERCISE))
        if session.completed_set_count:
            choices.append(questionary.Choice("Finish workout", FINISH))
        choices.append(questionary.Choice("Discard workout", DISCARD))
        return choices

    async def _add_exercises(self, session: WorkoutSession) -> WorkoutSession:
        choices = []
        for category, items in group_by_category(self.exercises).items():
            choices.append(questionary.Separator(f"-- {category} --"))
            for exercise in items:
                if not session.has_exercise(exercise):
                    choices.append(questionary.Choice(exercise.name, exercise))

        selected = await questionary.checkbox(
            "Select exercises", choices=choices, style=custom_style
        ).ask_async()
        return session.add_exercises(selected or [])

    async def _pick_exercise(self, session: WorkoutSession) -> int | None:
        if len(session.exercises) == 1:
            return 0
        return await questionary.select(
            "Which exercise?",
            choices=[
                questionary.Choice(draft.exercise.name, index)
                for index, draft in enumerate(session.exercises)
            ],
            style=custom_style,
        ).ask_async()

    async def _pick_set(
        self, session: WorkoutSession, exercise_index: int, open_only: bool
    ) -> int | None:
        draft = session.exercises[exercise_index]
        choices = [
            questionary.Choice(f"Set {number}", number - 1)
            for number, s in enumerate(draft.sets, start=1)
            if not (open_only and s.completed)
        ]
        if not choices:
            return None
        if len(choices) == 1:
            return choices[0].value
        return await questionary.select(
            "Which set?", choices=choices, style=custom_style
        ).ask_async()

    async def _log_set(self, session: WorkoutSession) -> WorkoutSession:
        exercise_index = await self._pick_exercise(session)
        if exercise_index is None:
            return session

        set_index = await self._pick_set(session, exercise_index, open_only=True)
        if set_index is None:
            # Every row is done; start a new one
            session = session.add_set(exercise_index)
            set_index = len(session.exercises[exercise_index].sets) - 1

        current = session.exercises[exercise_index].sets[set_index]
        weight = await questionary.text(
            f"Weight ({self.unit.value})",
            default=current.weight,
            validate=_is_number,
            style=custom_style,
        ).ask_async()
        reps = await questionary.text(
            "Reps", default=current.reps, validate=_is_whole_number, style=custom_style
        ).ask_async()
        if weight is None or reps is None:
            return session
        is_warmup = await questionary.confirm(
            "Warm-up set?", default=current.is_warmup, style=custom_style
        ).ask_async()

        session = session.update_set(
            exercise_index, set_index, weight=weight, reps=reps, is_warmup=bool(is_warmup)
        )
        return session.complete_set(exercise_index, set_index)

    async def _remove_set(self, session: WorkoutSession) -> WorkoutSession:
        exercise_index = await self._pick_exercise(session)
        if exercise_index is None:
            return session
        set_index = await self._pick_set(session, exercise_index, open_only=False)
        if set_index is None:
            return session
        return session.remove_set(exercise_index, set_index)
