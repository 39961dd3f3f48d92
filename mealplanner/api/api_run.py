from fastapi import FastAPI, APIRouter, Request, Response
from fastapi.responses import JSONResponse

from pathlib import Path
from typing import Optional, Union
import logging

from mealplanner.api.schemas import IngredientInput, MealInput, QuantityUpdateInput, WeekInput
from mealplanner.domain.Ingredient import Ingredient
from mealplanner.domain.Meal import Meal
from mealplanner.domain.Planner import Planner
from mealplanner.domain.Week import Week
from mealplanner.infra.paths import PLANNER_FILE
from mealplanner.infra.pdf_utils import generate_pdf_for_week
from mealplanner.logic.reporting.nutrition import compute_week_nutrition
from mealplanner.logic.shopping.list_builder import shopping_list_rows
from mealplanner.utilities.constants import DAYS_OF_THE_WEEK
from mealplanner.utilities.errors import ErrorCode, ValidationError

# Logging
logger = logging.getLogger("mealplanner_app")

STATUS_BY_CODE = {
    ErrorCode.DOESNT_EXIST: 404,
    ErrorCode.ALREADY_EXISTS: 409,
}


# -------------------- Serialisation helpers --------------------
def _meal_dict(meal: Meal):
    return {
        "name": meal.name,
        "calories": meal.calories(),
        "ingredients": [ing.to_dict() for ing in meal.ingredients],
    }


def _week_dict(week: Week, detail: bool = True):
    data = {"anchor_date": week.anchor_date, "label": week.month_header()}
    if detail:
        data["days"] = {name: [_meal_dict(m) for m in day.meals] for name, day in week.named_days()}
        data["avg_calories_per_day"] = week.avg_calories_per_day()
    return data


def _ingredient_args(payload: IngredientInput):
    return (payload.name, payload.quantity,
            payload.carbs_per_100g, payload.fat_per_100g, payload.protein_per_100g)


# -------------------- App factory --------------------
def create_app(data_file: Union[str, Path] = PLANNER_FILE, planner: Optional[Planner] = None) -> FastAPI:
    """Build the API around one planner; the CSV is read at startup and rewritten at shutdown."""
    app = FastAPI(title="Weekly Meal Planner API")
    router = APIRouter(prefix="/api")
    app.state.planner = planner if planner is not None else Planner()
    app.state.data_file = Path(data_file)

    @app.on_event("startup")
    def _load_planner():
        report = app.state.planner.load(app.state.data_file)
        logger.info(f"Planner loaded: {report.applied} rows applied, {report.skipped} skipped")

    @app.on_event("shutdown")
    def _save_planner():
        app.state.planner.save(app.state.data_file)

    @app.exception_handler(ValidationError)
    async def _validation_error(request: Request, exc: ValidationError):
        return JSONResponse(
            status_code=STATUS_BY_CODE.get(exc.code, 400),
            content={"error": exc.message, "field": exc.field, "code": exc.code.value},
        )

    def store() -> Planner:
        return app.state.planner

    # -------------------- Weeks --------------------
    @router.get("/weeks")
    def list_weeks():
        weeks = store().weeks
        return {"weeks": [_week_dict(w, detail=False) for w in weeks], "count": len(weeks)}

    @router.post("/weeks", status_code=201)
    def add_week(payload: WeekInput):
        return _week_dict(store().add_week(payload.anchor_date))

    @router.get("/weeks/{anchor}")
    def get_week(anchor: str):
        return _week_dict(store().get_week(anchor))

    @router.delete("/weeks/{anchor}")
    def remove_week(anchor: str):
        week = store().remove_week(anchor)
        return {"status": "success", "removed": week.anchor_date}

    # -------------------- Meals --------------------
    @router.get("/weeks/{anchor}/days/{day}")
    def get_day(anchor: str, day: str):
        found = store().get_day(anchor, day)
        return {"day": DAYS_OF_THE_WEEK[Week.day_index(day)],
                "calories": found.calories(),
                "meals": [_meal_dict(m) for m in found.meals]}

    @router.post("/weeks/{anchor}/days/{day}/meals", status_code=201)
    def add_meal(anchor: str, day: str, payload: MealInput):
        return _meal_dict(store().add_meal(anchor, day, payload.name))

    @router.get("/weeks/{anchor}/days/{day}/meals/{meal}")
    def get_meal(anchor: str, day: str, meal: str):
        return _meal_dict(store().get_meal(anchor, day, meal))

    @router.delete("/weeks/{anchor}/days/{day}/meals/{meal}")
    def remove_meal(anchor: str, day: str, meal: str):
        removed = store().remove_meal(anchor, day, meal)
        return {"status": "success", "removed": removed.name}

    # -------------------- Ingredients --------------------
    @router.post("/weeks/{anchor}/days/{day}/meals/{meal}/ingredients", status_code=201)
    def add_ingredient(anchor: str, day: str, meal: str, payload: IngredientInput):
        ingredient: Ingredient = store().add_ingredient(anchor, day, meal, *_ingredient_args(payload))
        return ingredient.to_dict()

    @router.put("/weeks/{anchor}/days/{day}/meals/{meal}/ingredients/{name}")
    def change_quantity(anchor: str, day: str, meal: str, name: str, payload: QuantityUpdateInput):
        return store().change_ingredient_quantity(anchor, day, meal, name, payload.quantity).to_dict()

    @router.delete("/weeks/{anchor}/days/{day}/meals/{meal}/ingredients/{name}")
    def remove_ingredient(anchor: str, day: str, meal: str, name: str):
        removed = store().remove_ingredient(anchor, day, meal, name)
        return {"status": "success", "removed": removed.name}

    # -------------------- Reports --------------------
    @router.get("/weeks/{anchor}/shopping-list")
    def shopping_list(anchor: str):
        week = store().get_week(anchor)
        items = shopping_list_rows(week)
        return {"anchor_date": week.anchor_date, "items": items, "count": len(items)}

    @router.get("/weeks/{anchor}/nutrition")
    def nutrition(anchor: str):
        return compute_week_nutrition(store().get_week(anchor))

    @router.get("/weeks/{anchor}/pdf")
    def week_pdf(anchor: str):
        week = store().get_week(anchor)
        pdf = generate_pdf_for_week(week)
        headers = {"Content-Disposition": f'attachment; filename="meal_plan_{week.anchor_date}.pdf"'}
        return Response(content=pdf, media_type="application/pdf", headers=headers)

    app.include_router(router)
    return app


app = create_app()
