from typing import Final, Tuple

DAYS_OF_THE_WEEK: Final[Tuple[str, ...]] = (
    "Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"
)

# Extra spellings accepted for interactive navigation (full names and "0".."6" are implicit)
WEEKDAY_ALIASES: Final[dict[str, int]] = {
    "sun": 0, "mon": 1, "tue": 2, "tues": 2, "wed": 3,
    "thu": 4, "thurs": 4, "fri": 5, "sat": 6,
}

MONTH_NAMES: Final[Tuple[str, ...]] = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December"
)

# Atwater factors (kcal per gram)
KCAL_PER_GRAM_CARB: Final[float] = 4.0
KCAL_PER_GRAM_FAT: Final[float] = 9.0
KCAL_PER_GRAM_PROTEIN: Final[float] = 4.0

# Flat-file layout
EMPTY_PLACEHOLDER: Final[str] = "_EMPTY_"
CSV_HEADER: Final[Tuple[str, ...]] = (
    "WeekAnchorDate", "DayOfWeek", "MealName", "IngredientName",
    "Quantity", "CarbsPer100g", "FatPer100g", "ProteinPer100g",
)
SHORT_ROW_LENGTH: Final[int] = 5
FULL_ROW_LENGTH: Final[int] = 8
