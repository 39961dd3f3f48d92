"""Interactive console for the planner.

The current path (week > day > meal > ingredient) is an immutable Selection
value: every handler receives the current selection and returns the next one.
"""
from __future__ import annotations
import logging
import sys
from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, Optional, TextIO

from mealplanner.domain.Planner import Planner
from mealplanner.utilities.constants import DAYS_OF_THE_WEEK
from mealplanner.utilities.errors import ValidationError
from mealplanner.utilities.validators import resolve_weekday

logger = logging.getLogger(__name__)

HELP_COMMANDS = {"help", "h", "commands", "command list", "list commands"}
CLEAR_COMMANDS = {"clear", "c", "clr"}
BACK_COMMANDS = {"back", "b"}
EXIT_COMMANDS = {"main", "quit", "0", "exit"}
YES_ANSWERS = {"y", "yes"}


@dataclass(frozen=True)
class Selection:
    week: Optional[str] = None
    day_index: Optional[int] = None
    meal: Optional[str] = None
    ingredient: Optional[str] = None

    @property
    def day(self) -> Optional[str]:
        return DAYS_OF_THE_WEEK[self.day_index] if self.day_index is not None else None

    @property
    def level(self) -> str:
        if self.ingredient is not None:
            return "ingredient"
        if self.meal is not None:
            return "meal"
        if self.day_index is not None:
            return "day"
        if self.week is not None:
            return "week"
        return "planner"

    def context(self) -> str:
        """Prompt of the form mealplanner>week>day>meal>ingredient> (with trailing space)."""
        parts = ["mealplanner"]
        parts += [p for p in (self.week, self.day, self.meal, self.ingredient) if p is not None]
        return ">".join(parts) + "> "

    def back(self) -> "Selection":
        if self.ingredient is not None:
            return replace(self, ingredient=None)
        if self.meal is not None:
            return replace(self, meal=None)
        if self.day_index is not None:
            return replace(self, day_index=None)
        return Selection()


class PlannerShell:
    """Menu loop over a Planner; input/output streams are injectable for tests."""

    def __init__(self, planner: Planner, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None):
        self.planner = planner
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout

    # --- I/O helpers -----------------------------------------------------
    def _print(self, text: str = "", end: str = "\n"):
        self.stdout.write(text + end)
        self.stdout.flush()

    def _read(self, prompt: str = "") -> Optional[str]:
        if prompt:
            self._print(prompt, end="")
        line = self.stdin.readline()
        if not line:
            return None
        return line.strip()

    def _attempt(self, action: Callable[[], Any], selection: Selection, success: str,
                 select: Optional[Callable[[Any], Selection]] = None) -> Selection:
        """Run one user action; on success optionally move the selection to what it produced."""
        try:
            result = action()
        except ValidationError as ve:
            logger.debug("Action rejected: %r", ve)
            self._print(f"[ERROR] {ve.message}")
            return selection
        self._print(f"[SUCCESS] {success}")
        return select(result) if select is not None else selection

    # --- main menu -------------------------------------------------------
    def print_main_menu(self, selection: Selection):
        self._print("\n------------ MAIN MENU ------------")
        self._print(f"Current selection: {selection.context()}")
        self._print("1. Change selection")
        options = {
            "ingredient": ["2. View current ingredient", "3. Change ingredient quantity"],
            "meal": ["2. View current meal", "3. Add ingredient", "4. Remove ingredient"],
            "day": ["2. View current day", "3. Add meal", "4. Remove meal"],
            "week": ["2. View current week", "3. Get shopping list for the current week"],
            "planner": ["2. List all weeks", "3. Add week", "4. Remove week"],
        }
        for line in options[selection.level]:
            self._print(line)
        self._print("0. Exit")
        self._print("Enter choice: ", end="")

    def run(self, selection: Selection = Selection()) -> Selection:
        handlers: Dict[str, Callable[[Selection], Selection]] = {
            "1": self.change_selection,
            "2": self.main_option_2,
            "3": self.main_option_3,
            "4": self.main_option_4,
        }
        while True:
            self.print_main_menu(selection)
            choice = self._read()
            if choice is None or choice == "0":
                return selection
            handler = handlers.get(choice)
            if handler is None:
                self._print("[ERROR] Unrecognized input.")
                continue
            selection = handler(selection)

    def main_option_2(self, selection: Selection) -> Selection:
        try:
            level = selection.level
            if level == "ingredient":
                text = self.planner.describe_ingredient(selection.week, selection.day, selection.meal,
                                                        selection.ingredient)
            elif level == "meal":
                text = self.planner.describe_meal(selection.week, selection.day, selection.meal)
            elif level == "day":
                text = self.planner.describe_day(selection.week, selection.day)
            elif level == "week":
                text = self.planner.describe_week(selection.week)
            else:
                text = self.planner.describe_all_weeks()
        except ValidationError as ve:
            self._print(f"[ERROR] {ve.message}")
            return selection
        self._print(text)
        return selection

    def main_option_3(self, selection: Selection) -> Selection:
        level = selection.level
        if level == "ingredient":
            quantity = self._read("Enter new quantity: ")
            return self._attempt(
                lambda: self.planner.change_ingredient_quantity(selection.week, selection.day, selection.meal,
                                                                selection.ingredient, quantity),
                selection, "Changed ingredient quantity.")

        if level == "meal":
            name = self._read("Enter the name of the ingredient: ")
            quantity = self._read("Enter the quantity (in grams): ")
            nutrients = (None, None, None)
            answer = self._read("Do you want to include a nutritional profile (Y/N)? ") or ""
            if answer.lower() in YES_ANSWERS:
                nutrients = (
                    self._read("Enter the amount of carbohydrates per 100 grams (in grams): "),
                    self._read("Enter the amount of fat per 100 grams (in grams): "),
                    self._read("Enter the amount of protein per 100 grams (in grams): "),
                )
            return self._attempt(
                lambda: self.planner.add_ingredient(selection.week, selection.day, selection.meal,
                                                    name, quantity, *nutrients),
                selection, "Added new ingredient.",
                select=lambda ingredient: replace(selection, ingredient=ingredient.name))

        if level == "day":
            name = self._read("Enter the name of the meal: ")
            return self._attempt(lambda: self.planner.add_meal(selection.week, selection.day, name),
                                 selection, "Added new meal.",
                                 select=lambda meal: replace(selection, meal=meal.name))

        if level == "week":
            try:
                self._print(self.planner.describe_shopping_list(selection.week))
            except ValidationError as ve:
                self._print(f"[ERROR] {ve.message}")
            return selection

        anchor = self._read("Enter the anchor date of the week (Sunday) in the form YYYY-MM-DD: ")
        return self._attempt(lambda: self.planner.add_week(anchor), selection, "Added new week.",
                             select=lambda week: Selection(week=week.anchor_date))

    def main_option_4(self, selection: Selection) -> Selection:
        level = selection.level
        if level in ("ingredient", "week"):
            self._print("[ERROR] Unrecognized input.")
            return selection
        if level == "meal":
            name = self._read("Enter the name of the ingredient: ")
            return self._attempt(
                lambda: self.planner.remove_ingredient(selection.week, selection.day, selection.meal, name),
                selection, "Removed ingredient.")
        if level == "day":
            name = self._read("Enter the name of the meal: ")
            return self._attempt(lambda: self.planner.remove_meal(selection.week, selection.day, name),
                                 selection, "Removed meal.")
        anchor = self._read("Enter the anchor date of the week (Sunday) in the form YYYY-MM-DD: ")
        return self._attempt(lambda: self.planner.remove_week(anchor), selection, "Removed week.")

    # --- selection sub-loop ----------------------------------------------
    def print_command_list(self):
        self._print("\n------------ COMMANDS ------------")
        self._print("clear: Clears the current selection")
        self._print("back: Goes back one level")
        self._print("main: Returns to the main menu")

    def change_selection(self, selection: Selection) -> Selection:
        self._print("\n------------ CHANGE SELECTION ------------")
        self._print("Enter 'help' to view a list of commands")
        while True:
            command = self._read(selection.context())
            if command is None:
                return selection
            command = command.lower()
            if command in HELP_COMMANDS:
                self.print_command_list()
            elif command in CLEAR_COMMANDS:
                selection = Selection()
            elif command in BACK_COMMANDS:
                selection = selection.back()
            elif command in EXIT_COMMANDS:
                return selection
            else:
                selection = self.next_level(selection, command)

    def next_level(self, selection: Selection, token: str) -> Selection:
        """Descend one level by name; prints an error and keeps the selection when not found."""
        level = selection.level
        try:
            if level == "ingredient":
                self._print("[ERROR] Unrecognized input.")
                return selection
            if level == "meal":
                ingredient = self.planner.get_ingredient(selection.week, selection.day, selection.meal, token)
                return replace(selection, ingredient=ingredient.name)
            if level == "day":
                meal = self.planner.get_meal(selection.week, selection.day, token)
                return replace(selection, meal=meal.name)
            if level == "week":
                index = resolve_weekday(token)
                if index is None:
                    self._print("[ERROR] Invalid day of the week.")
                    return selection
                return replace(selection, day_index=index)
            week = self.planner.get_week(token)
            return Selection(week=week.anchor_date)
        except ValidationError as ve:
            self._print(f"[ERROR] {ve.message}")
            return selection


__all__ = ["Selection", "PlannerShell"]
