import io
from reportlab.lib.pagesizes import A4
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer
from reportlab.lib import colors
from reportlab.lib.styles import getSampleStyleSheet

from mealplanner.domain.Week import Week
from mealplanner.logic.shopping.list_builder import build_shopping_list

_TABLE_STYLE = TableStyle([
    ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#4CAF50")),
    ("TEXTCOLOR", (0, 0), (-1, 0), colors.whitesmoke),
    ("ALIGN", (0, 0), (-1, -1), "CENTER"),
    ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
    ("FONTSIZE", (0, 0), (-1, 0), 12),
    ("BOTTOMPADDING", (0, 0), (-1, 0), 10),
    ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
])


def generate_pdf_for_week(week: Week) -> bytes:
    """Generate a PDF with a Day / Meals / Calories table followed by the week's shopping list."""
    buf = io.BytesIO()
    doc = SimpleDocTemplate(
        buf, pagesize=A4,
        rightMargin=20, leftMargin=20, topMargin=20, bottomMargin=20
    )

    styles = getSampleStyleSheet()
    elements = [
        Paragraph(f"Meal Plan - {week.month_header()}", styles["Title"]),
        Spacer(1, 16),
    ]

    plan = [["Day", "Meals", "Calories"]]
    for name, day in week.named_days():
        meals = ", ".join(meal.name for meal in day.meals) or "-"
        plan.append([name, meals, f"{day.calories():.0f}"])
    plan.append(["Average", "", f"{week.avg_calories_per_day():.0f}"])

    table = Table(plan, repeatRows=1)
    table.setStyle(_TABLE_STYLE)
    elements.append(table)

    items = build_shopping_list(week)
    if items:
        elements += [Spacer(1, 24), Paragraph("Shopping list", styles["Heading2"]), Spacer(1, 8)]
        shopping = [["Ingredient", "Quantity (g)"]]
        shopping += [[ing.name, f"{ing.quantity:.2f}"] for ing in items]
        shopping_table = Table(shopping, repeatRows=1)
        shopping_table.setStyle(_TABLE_STYLE)
        elements.append(shopping_table)

    doc.build(elements)
    return buf.getvalue()
