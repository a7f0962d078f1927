# app/utils/calculations.py
"""
Body metric formulas shared by the client summary and the diet plan generator.

Units: weight in kg, height in cm, age in years, energy in kcal.
"""
from __future__ import annotations

from datetime import date, datetime
from typing import Dict, Optional

# Mifflin-St Jeor activity multipliers
ACTIVITY_FACTORS: Dict[str, float] = {
    "sedentary": 1.2,      # little or no exercise
    "light": 1.375,        # 1-3 days/week
    "moderate": 1.55,      # 3-5 days/week
    "active": 1.725,       # 6-7 days/week
    "very_active": 1.9,    # physical job or twice a day
}

KCAL_PER_GRAM = {"protein": 4, "carbs": 4, "fat": 9}


def calculate_bmi(weight_kg: float, height_cm: float) -> float:
    if height_cm <= 0:
        raise ValueError("height_cm must be positive")
    height_m = height_cm / 100
    return weight_kg / (height_m * height_m)


def bmi_classification(bmi: float) -> str:
    if bmi < 18.5:
        return "Zayıf"
    elif bmi < 25:
        return "Normal"
    elif bmi < 30:
        return "Fazla Kilolu"
    elif bmi < 35:
        return "Obez (Sınıf 1)"
    elif bmi < 40:
        return "Obez (Sınıf 2)"
    return "Aşırı Obez (Sınıf 3)"


def parse_birth_date(value: Optional[str]) -> Optional[date]:
    if not value:
        return None
    try:
        return datetime.strptime(value[:10], "%Y-%m-%d").date()
    except ValueError:
        return None


def calculate_age(birth_date: date, today: Optional[date] = None) -> int:
    """
    Whole years, one less when this year's birthday is still ahead.
    """
    today = today or date.today()
    age = today.year - birth_date.year
    if (today.month, today.day) < (birth_date.month, birth_date.day):
        age -= 1
    return age


def calculate_bmr(weight_kg: float, height_cm: float, age_years: float, gender: Optional[str]) -> float:
    # anything other than "male" uses the female constant
    base = 10 * weight_kg + 6.25 * height_cm - 5 * age_years
    return base + 5 if gender == "male" else base - 161


def calculate_mifflin_st_jeor(
    weight_kg: float,
    height_cm: float,
    age_years: float,
    gender: Optional[str],
    activity_level: Optional[str] = "sedentary",
) -> float:
    """
    Daily energy need: BMR times the activity multiplier (sedentary when unknown).
    """
    factor = ACTIVITY_FACTORS.get(activity_level or "sedentary", ACTIVITY_FACTORS["sedentary"])
    return calculate_bmr(weight_kg, height_cm, age_years, gender) * factor


def estimate_body_fat_percentage(bmi: float, age_years: float, gender: Optional[str]) -> float:
    if gender == "male":
        return 1.2 * bmi + 0.23 * age_years - 16.2
    return 1.2 * bmi + 0.23 * age_years - 5.4


def calculate_macros(
    daily_calories: float,
    protein_percentage: float = 30,
    carb_percentage: float = 40,
    fat_percentage: float = 30,
) -> Dict[str, int]:
    """
    Grams of protein, carbs and fat for a calorie target.

    Raises:
        ValueError: when the percentages do not add up to 100
    """
    if round(protein_percentage + carb_percentage + fat_percentage, 6) != 100:
        raise ValueError("Makro besin oranları %100'e eşit olmalıdır")

    return {
        "protein": round(daily_calories * protein_percentage / 100 / KCAL_PER_GRAM["protein"]),
        "carbs": round(daily_calories * carb_percentage / 100 / KCAL_PER_GRAM["carbs"]),
        "fat": round(daily_calories * fat_percentage / 100 / KCAL_PER_GRAM["fat"]),
    }


def weight_progress_percentage(
    starting_weight: float, current_weight: float, target_weight: float
) -> float:
    """
    Share of the way from the starting weight to the target, clamped to 0-100.
    """
    total = target_weight - starting_weight
    if total == 0:
        return 100.0
    progress = (current_weight - starting_weight) / total * 100
    return max(0.0, min(100.0, progress))


def has_reached_target(starting_weight: float, current_weight: float, target_weight: float) -> bool:
    if target_weight < starting_weight:
        return current_weight <= target_weight
    if target_weight > starting_weight:
        return current_weight >= target_weight
    return abs(current_weight - target_weight) < 0.5
