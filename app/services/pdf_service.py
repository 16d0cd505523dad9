"""
PDF rendering for training plans and workout logs (ReportLab).

Both renderers return the finished document as bytes so the endpoints
can stream it back as an attachment.
"""

from __future__ import annotations

import datetime
import io
from typing import Any, Sequence
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from app.coach.templates import DAYS_OF_WEEK
from app.models.user import User
from app.models.workout import Workout

_FOOTER = "Generated by Athlete Training App"


def _styles() -> dict[str, ParagraphStyle]:
    base = getSampleStyleSheet()
    return {
        "title": ParagraphStyle("TitleStyle", parent=base["Title"], fontSize=24, spaceAfter=20),
        "heading": ParagraphStyle("HeadingStyle", parent=base["Heading2"], fontSize=16, spaceBefore=16,
                                  spaceAfter=8, textColor=colors.HexColor("#0066cc")),
        "subheading": ParagraphStyle("SubheadingStyle", parent=base["Heading3"], fontSize=12, spaceBefore=8,
                                     spaceAfter=4),
        "normal": ParagraphStyle("NormalStyle", parent=base["Normal"], fontSize=10, spaceBefore=2, spaceAfter=2),
        "meta": ParagraphStyle("MetaStyle", parent=base["Normal"], fontSize=11, textColor=colors.grey),
    }


def _text(value: Any) -> str:
    return escape(str(value))


def _draw_footer(canvas, doc) -> None:
    canvas.saveState()
    canvas.setFont("Helvetica", 8)
    canvas.setFillColor(colors.grey)
    canvas.drawCentredString(A4[0] / 2, 20, f"{_FOOTER} • Page {doc.page} • "
                                            f"{datetime.date.today().isoformat()}")
    canvas.restoreState()


def _build(story: list) -> bytes:
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(buffer, pagesize=A4, leftMargin=0.8 * inch, rightMargin=0.8 * inch)
    doc.build(story, onFirstPage=_draw_footer, onLaterPages=_draw_footer)
    return buffer.getvalue()


# ======================================================================
# Training plan
# ======================================================================


def render_training_plan(user: User, plan: dict[str, Any], start_date: datetime.date) -> bytes:
    """Render *plan* (a coach plan document with a ``weeks`` list)."""
    styles = _styles()
    story: list = [
        Paragraph("TRAINING PLAN", styles["title"]),
        Paragraph(f"Generated for: {_text(user.name)} &nbsp;&nbsp; Start Date: {start_date.isoformat()}",
                  styles["meta"]),
        Paragraph(f"Athlete Type: {_text(user.athlete_type)} &nbsp;&nbsp; "
                  f"Fitness Level: {_text(user.fitness_level)}", styles["meta"]),
        Spacer(1, 12),
        Paragraph(_text(plan.get("plan_title") or "Personalized Training Plan"), styles["heading"]),
        Paragraph(f"Goal: {_text(plan.get('goal') or 'Improve overall fitness')}", styles["normal"]),
        Paragraph(f"Duration: {_text(plan.get('duration_weeks') or len(plan['weeks']))} weeks", styles["normal"]),
        Paragraph(f"Intensity: {_text(plan.get('intensity_level') or 'moderate')}", styles["normal"]),
    ]

    for week in plan["weeks"]:
        story.append(Paragraph(f"Week {_text(week.get('week_number', ''))}: {_text(week.get('focus', ''))}",
                               styles["heading"]))
        goals = week.get("goals") or []
        if goals:
            story.append(Paragraph("Goals:", styles["subheading"]))
            story.extend(Paragraph(f"• {_text(goal)}", styles["normal"]) for goal in goals)
        if week.get("total_volume"):
            story.append(Paragraph(f"Total Volume: {_text(week['total_volume'])}", styles["normal"]))

        days = week.get("days") or {}
        rows = [["Day", "Type", "Duration", "Intensity", "Description"]]
        for day in DAYS_OF_WEEK:
            workout = days.get(day)
            if not workout:
                continue
            rows.append([
                day.capitalize(),
                Paragraph(_text(workout.get("workout_type", "")), styles["normal"]),
                _text(workout.get("duration", "")),
                f"{_text(workout.get('intensity', ''))}/10" if workout.get("intensity") else "",
                Paragraph(_text(workout.get("description", "")), styles["normal"]),
            ])
        if len(rows) > 1:
            table = Table(rows, colWidths=[0.9 * inch, 1.3 * inch, 0.9 * inch, 0.7 * inch, 2.7 * inch],
                          repeatRows=1)
            table.setStyle(TableStyle([
                ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#f0f0f0")),
                ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                ("FONTSIZE", (0, 0), (-1, -1), 9),
                ("VALIGN", (0, 0), (-1, -1), "TOP"),
                ("GRID", (0, 0), (-1, -1), 0.5, colors.lightgrey),
            ]))
            story.extend([Spacer(1, 6), table])

        strategies = week.get("recovery_strategies") or []
        if strategies:
            story.append(Paragraph("Recovery Strategies:", styles["subheading"]))
            story.extend(Paragraph(f"• {_text(item)}", styles["normal"]) for item in strategies)

    metrics = plan.get("performance_metrics") or []
    if metrics:
        story.append(Paragraph("Performance Metrics", styles["heading"]))
        story.extend(Paragraph(f"• {_text(metric)}", styles["normal"]) for metric in metrics)

    if plan.get("notes"):
        story.append(Paragraph("Important Notes:", styles["heading"]))
        story.append(Paragraph(_text(plan["notes"]), styles["normal"]))

    return _build(story)


# ======================================================================
# Workout log
# ======================================================================


def render_workout_log(user: User, workouts: Sequence[Workout], start: datetime.datetime,
                       end: datetime.datetime) -> bytes:
    """Render a summary plus one table row per workout (given newest first)."""
    styles = _styles()
    total = len(workouts)
    duration = sum(w.duration_minutes or 0 for w in workouts)
    distance = sum(w.distance_km or 0 for w in workouts)
    calories = sum(w.calories_burned or 0 for w in workouts)
    average = f"{duration / total:.1f}" if total else "0.0"

    story: list = [
        Paragraph("WORKOUT LOG", styles["title"]),
        Paragraph(f"Athlete: {_text(user.name)}", styles["meta"]),
        Paragraph(f"Period: {start.date().isoformat()} - {end.date().isoformat()}", styles["meta"]),
        Paragraph("Summary Statistics", styles["heading"]),
        Paragraph(f"Total Workouts: {total}", styles["normal"]),
        Paragraph(f"Total Duration: {duration:g} minutes", styles["normal"]),
        Paragraph(f"Total Distance: {distance:.2f} km", styles["normal"]),
        Paragraph(f"Total Calories: {calories:g}", styles["normal"]),
        Paragraph(f"Average Duration: {average} minutes per workout", styles["normal"]),
    ]

    if workouts:
        story.append(Paragraph("Workout Details", styles["heading"]))
        rows = [["Date", "Type", "Duration", "Distance", "Calories", "Pace"]]
        for workout in workouts:
            rows.append([
                workout.occurred_at.date().isoformat(),
                workout.category,
                f"{workout.duration_minutes:g} min",
                f"{workout.distance_km:.2f} km" if workout.distance_km else "-",
                f"{workout.calories_burned:g}" if workout.calories_burned else "-",
                f"{workout.pace_min_per_km:.2f}/km" if workout.pace_min_per_km else "-",
            ])
        table = Table(rows, repeatRows=1)
        table.setStyle(TableStyle([
            ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#f0f0f0")),
            ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
            ("FONTSIZE", (0, 0), (-1, -1), 9),
            ("ALIGN", (2, 1), (-1, -1), "RIGHT"),
            ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, colors.HexColor("#fafafa")]),
            ("GRID", (0, 0), (-1, -1), 0.5, colors.lightgrey),
        ]))
        story.append(table)
    else:
        story.append(Paragraph("No workouts recorded in this period.", styles["normal"]))

    return _build(story)
