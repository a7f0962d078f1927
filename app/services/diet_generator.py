# app/services/diet_generator.py
"""
Rule-based diet plan suggestion built from a client's profile.

Energy need comes from Mifflin-St Jeor times the activity factor. It is adjusted
toward the weight goal and split into macros, and the medical history and
dietary restrictions tailor the macro split and the menu.
"""
import logging
from copy import deepcopy
from datetime import date
from typing import Any, Dict, List, Optional, Tuple

from app.models import Client
from app.schemas.diet_plan import GeneratedDietPlan
from app.utils.calculations import (ACTIVITY_FACTORS, calculate_age,
                                    calculate_bmi, calculate_bmr,
                                    parse_birth_date)

logger = logging.getLogger(__name__)

DEFAULT_WEIGHT = 70
DEFAULT_HEIGHT = 170
DEFAULT_AGE = 30
KCAL_PER_KG_FAT = 7700

ACTIVITY_DESCRIPTIONS = {
    "sedentary": "hareketsiz yaşam tarzı",
    "light": "hafif aktif yaşam tarzı (haftada 1-3 gün egzersiz)",
    "moderate": "orta aktif yaşam tarzı (haftada 3-5 gün egzersiz)",
    "active": "çok aktif yaşam tarzı (haftada 6-7 gün egzersiz)",
    "very_active": "ekstra aktif yaşam tarzı (fiziksel iş veya günde iki kez egzersiz)",
}

STANDARD_MEALS: List[Dict[str, Any]] = [
    {
        "name": "Kahvaltı",
        "foods": [
            {"name": "Yulaf Ezmesi", "amount": "50g", "calories": 180},
            {"name": "Süt (Yarım Yağlı)", "amount": "200ml", "calories": 90},
            {"name": "Muz", "amount": "1 adet (orta boy)", "calories": 105},
            {"name": "Badem", "amount": "10g", "calories": 60},
        ],
    },
    {
        "name": "Öğle Yemeği",
        "foods": [
            {"name": "Izgara Tavuk Göğsü", "amount": "100g", "calories": 165},
            {"name": "Bulgur Pilavı", "amount": "150g", "calories": 170},
            {"name": "Yeşil Salata (Zeytinyağlı)", "amount": "1 porsiyon", "calories": 80},
            {"name": "Tam Tahıllı Ekmek", "amount": "1 dilim", "calories": 80},
        ],
    },
    {
        "name": "Akşam Yemeği",
        "foods": [
            {"name": "Fırında Somon", "amount": "120g", "calories": 180},
            {"name": "Haşlanmış Sebze (Karışık)", "amount": "200g", "calories": 70},
            {"name": "Kinoa Salatası", "amount": "100g", "calories": 120},
        ],
    },
    {
        "name": "Ara Öğün 1",
        "foods": [
            {"name": "Yoğurt (Az Yağlı)", "amount": "200g", "calories": 90},
            {"name": "Karışık Kuru Meyve", "amount": "30g", "calories": 85},
        ],
    },
    {
        "name": "Ara Öğün 2",
        "foods": [
            {"name": "Protein Bar", "amount": "1 adet", "calories": 200},
            {"name": "Elma", "amount": "1 adet (orta boy)", "calories": 80},
        ],
    },
]

# keyword -> (label, explanation, replacement meal)
RESTRICTION_RULES: Dict[str, Tuple[str, str, Dict[str, Any]]] = {
    "vegan": (
        "Vegan",
        "Vegan beslenme tarzına uygun olarak hayvansal ürünler içermeyen besinler seçilmiştir. "
        "Protein ihtiyacını karşılamak için bakliyatlar ve bitkisel protein kaynakları önerilmiştir.",
        {
            "name": "Kahvaltı",
            "foods": [
                {"name": "Yulaf Ezmesi", "amount": "50g", "calories": 180},
                {"name": "Badem Sütü", "amount": "200ml", "calories": 60},
                {"name": "Muz", "amount": "1 adet (orta boy)", "calories": 105},
                {"name": "Chia Tohumu", "amount": "1 yemek kaşığı", "calories": 60},
                {"name": "Karışık Kuruyemiş", "amount": "20g", "calories": 110},
            ],
        },
    ),
    "vejetaryen": (
        "Vejetaryen",
        "Vejetaryen beslenme tarzına uygun olarak et içermeyen alternatifler seçilmiştir. "
        "Yeterli protein alımı için yumurta, süt ürünleri ve baklagiller önerilmiştir.",
        {
            "name": "Öğle Yemeği",
            "foods": [
                {"name": "Mercimek Köftesi", "amount": "150g", "calories": 200},
                {"name": "Bulgur Pilavı", "amount": "100g", "calories": 120},
                {"name": "Yoğurt", "amount": "150g", "calories": 85},
                {"name": "Mevsim Salata", "amount": "1 porsiyon", "calories": 70},
            ],
        },
    ),
    "gluten": (
        "Glutensiz",
        "Çölyak hastalığı veya gluten hassasiyeti göz önünde bulundurularak tüm öneriler "
        "glutensiz alternatiflerle hazırlanmıştır. Buğday, arpa, çavdar içeren ürünler yerine "
        "pirinç, mısır ve kinoa gibi glutensiz tahıllar önerilmiştir.",
        {
            "name": "Kahvaltı",
            "foods": [
                {"name": "Glutensiz Ekmek", "amount": "2 dilim", "calories": 140},
                {"name": "Yumurta", "amount": "2 adet", "calories": 160},
                {"name": "Beyaz Peynir", "amount": "30g", "calories": 75},
                {"name": "Zeytin", "amount": "5-6 adet", "calories": 30},
            ],
        },
    ),
    "laktoz": (
        "Laktozsuz",
        "Laktoz intoleransı dikkate alınarak süt ürünleri laktozsuz alternatiflerle "
        "değiştirilmiştir. Kalsiyum ihtiyacını karşılamak için laktozsuz süt ürünleri ve "
        "bitkisel kalsiyum kaynakları önerilmiştir.",
        {
            "name": "Ara Öğün",
            "foods": [
                {"name": "Laktozsuz Yoğurt", "amount": "150g", "calories": 80},
                {"name": "Meyve (Elma/Armut)", "amount": "1 adet", "calories": 80},
                {"name": "Keten Tohumu", "amount": "1 yemek kaşığı", "calories": 55},
            ],
        },
    ),
}

DIABETES_NOTES = [
    "Düşük glisemik indeksli besinler tercih edilmiştir.",
    "Kompleks karbonhidratlar basit şekerler yerine önerilmiştir.",
    "Kan şekeri seviyelerini dengelemek için öğünler düzenli dağıtılmıştır.",
]
HYPERTENSION_NOTES = [
    "Düşük sodyum içerikli besinler tercih edilmiştir.",
    "Potasyum açısından zengin besinler önerilmiştir.",
    "DASH diyeti prensipleri dikkate alınmıştır.",
]
CHOLESTEROL_NOTES = [
    "Doymuş yağlar sınırlandırılmıştır.",
    "Kalp sağlığını destekleyen omega-3 kaynakları eklenmiştir.",
    "Çözünür lif açısından zengin besinler önerilmiştir.",
]


def _js_round(value: float) -> int:
    # half-up rounding, so 2.5 -> 3
    return int(value + 0.5) if value >= 0 else -int(-value + 0.5)


class DietPlanGenerator:
    """
    Builds a GeneratedDietPlan for a client. Pure computation; nothing is stored.
    """

    def __init__(self, today: Optional[date] = None):
        self.today = today

    def generate(self, client: Client) -> GeneratedDietPlan:
        weight = client.starting_weight or DEFAULT_WEIGHT
        height = client.height or DEFAULT_HEIGHT

        birth_date = parse_birth_date(client.birth_date)
        age = calculate_age(birth_date, self.today) if birth_date else DEFAULT_AGE

        activity_level = client.activity_level if client.activity_level in ACTIVITY_FACTORS else "sedentary"
        maintenance = _js_round(
            calculate_bmr(weight, height, age, client.gender) * ACTIVITY_FACTORS[activity_level]
        )

        target_calories, goal_text, diet_type = self._apply_weight_goal(client, maintenance)
        medical_label, medical_notes = self._medical_considerations(client.medical_history)
        restriction_label, restriction_text, adjusted_meals = self._restrictions(client.dietary_restrictions)
        protein_pct, carbs_pct, fat_pct = self._macro_split(client)

        protein = _js_round(target_calories * protein_pct / 100 / 4)
        carbs = _js_round(target_calories * carbs_pct / 100 / 4)
        fat = _js_round(target_calories * fat_pct / 100 / 9)

        bmi = calculate_bmi(weight, height)
        bmi_category, bmi_advice = self._bmi_commentary(bmi)
        activity_text = ACTIVITY_DESCRIPTIONS[activity_level]

        paragraphs = [
            f"{client.name} için {age} yaş, {height:g} cm boy ve {weight:g} kg ağırlık değerlerine göre "
            f"özel olarak hesaplanmış {target_calories} kalorili {goal_text} diyet planı.",
            f'Vücut kitle indeksiniz (BMI): {bmi:.1f}, bu değer "{bmi_category}" kategorisine girmektedir. {bmi_advice}',
            f"{activity_text[0].upper()}{activity_text[1:]} için günlük bazal enerji ihtiyacınız {maintenance} kaloridir. "
            f"Hedefleriniz doğrultusunda günlük kalori alımınız {target_calories} kalori olarak belirlenmiştir.",
        ]
        if restriction_text:
            paragraphs.append(f"Diyet kısıtlamaları: {restriction_text}")
        if medical_notes:
            paragraphs.append(
                "Özel sağlık durumunuz için öneriler:\n" + "\n".join(f"- {note}" for note in medical_notes)
            )
        paragraphs.append(
            f"Bu diyet planı, {protein}g protein ({protein_pct}%), {carbs}g karbonhidrat ({carbs_pct}%) "
            f"ve {fat}g yağ ({fat_pct}%) içermektedir."
        )

        plan = GeneratedDietPlan(
            name=f"{diet_type}{medical_label}{restriction_label} - {client.name} için",
            description="\n\n".join(paragraphs),
            daily_calories=target_calories,
            macro_protein=protein,
            macro_carbs=carbs,
            macro_fat=fat,
            meals=self._complete_meals(adjusted_meals),
        )
        logger.info(f"Diet plan generated for client {client.client_id}: {target_calories} kcal")
        return plan

    def _apply_weight_goal(self, client: Client, maintenance: int) -> Tuple[int, str, str]:
        if not (client.target_weight and client.starting_weight):
            return maintenance, "kilo koruma", "Dengeli Beslenme"

        diff = client.target_weight - client.starting_weight
        if diff < 0:
            rate = min(0.85, 1 - abs(diff) * 0.01)
            target = _js_round(maintenance * rate)
            weekly = abs((maintenance - target) * 7 / KCAL_PER_KG_FAT)
            return target, f"kilo verme (haftada yaklaşık {weekly:.1f} kg)", "Kilo Verme Diyeti"
        if diff > 0:
            rate = min(1.15, 1 + abs(diff) * 0.01)
            target = _js_round(maintenance * rate)
            weekly = (target - maintenance) * 7 / KCAL_PER_KG_FAT
            return target, f"kilo alma (haftada yaklaşık {weekly:.1f} kg)", "Kilo Alma Diyeti"
        return maintenance, "kilo koruma", "Kilo Koruma Diyeti"

    def _medical_considerations(self, medical_history: Optional[str]) -> Tuple[str, List[str]]:
        if not medical_history:
            return "", []

        history = medical_history.lower()
        label = ""
        notes: List[str] = []
        if "diyabet" in history or "şeker" in history:
            label = " (Diyabete Özel)"
            notes.extend(DIABETES_NOTES)
        if "hipertansiyon" in history or "tansiyon" in history:
            label = " (Hipertansiyon ve Diyabete Özel)" if label else " (Hipertansiyona Özel)"
            notes.extend(HYPERTENSION_NOTES)
        if "kolesterol" in history:
            label = " (Kolesterol Kontrollü)"
            notes.extend(CHOLESTEROL_NOTES)
        return label, notes

    def _restrictions(self, dietary_restrictions: Optional[str]) -> Tuple[str, str, List[Dict[str, Any]]]:
        if not dietary_restrictions:
            return "", "", []

        restrictions = dietary_restrictions.lower()
        keywords = []
        # vegan already excludes everything vegetarian does
        if "vegan" in restrictions:
            keywords.append("vegan")
        elif "vejetaryen" in restrictions:
            keywords.append("vejetaryen")
        keywords.extend(k for k in ("gluten", "laktoz") if k in restrictions)

        labels, texts, meals = [], [], []
        for keyword in keywords:
            label, text, meal = RESTRICTION_RULES[keyword]
            labels.append(label)
            texts.append(text)
            meals.append(deepcopy(meal))

        label = f" ({' ve '.join(labels)})" if labels else ""
        return label, " ".join(texts), meals

    def _macro_split(self, client: Client) -> Tuple[int, int, int]:
        """
        (protein, carbs, fat) percentages of the daily calories.
        """
        protein, carbs, fat = 30, 45, 25
        history = (client.medical_history or "").lower()
        if "diyabet" in history or "şeker" in history:
            protein, carbs, fat = 35, 35, 30
        if "kolesterol" in history:
            protein, carbs, fat = 35, 45, 20
        if client.activity_level in ("active", "very_active"):
            protein, carbs, fat = 35, 45, 20
        return protein, carbs, fat

    def _bmi_commentary(self, bmi: float) -> Tuple[str, str]:
        if bmi < 18.5:
            return "zayıf", "Sağlıklı bir ağırlığa ulaşmak için günlük kalori alımını arttırmanız önerilir."
        if bmi < 25:
            return "normal kilolu", "Sağlıklı vücut ağırlığınızı korumak için dengeli beslenmeye devam etmelisiniz."
        if bmi < 30:
            return (
                "fazla kilolu",
                "Sağlıklı bir kiloya ulaşmak için kalori alımını azaltıp fiziksel aktiviteyi artırmanız önerilir.",
            )
        return (
            "obez",
            "Sağlık risklerini azaltmak için bir sağlık uzmanı rehberliğinde kilo vermeye odaklanmanız önerilir.",
        )

    def _complete_meals(self, adjusted: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        if not adjusted:
            return deepcopy(STANDARD_MEALS)

        meals = list(adjusted)
        names = {meal["name"] for meal in meals}
        for standard in STANDARD_MEALS[:3]:
            if standard["name"] not in names:
                meals.append(deepcopy(standard))
        if not any("Ara Öğün" in name for name in names):
            meals.extend(deepcopy(STANDARD_MEALS[3:]))
        return meals
