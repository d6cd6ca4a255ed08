"""Allergy and diet warnings for recipe ingredients."""

from dataclasses import dataclass
from types import MappingProxyType

from mealer.domain.analysis import RecipeWarning
from mealer.domain.recipes import RecipeIngredient
from mealer.services.similarity import normalize_name

ALLERGEN_KEYWORDS: MappingProxyType[str, tuple[str, ...]] = MappingProxyType(
    {
        "gluten": (
            "mąka",
            "mąki",
            "chleb",
            "bułka",
            "makaron",
            "pszenica",
            "pszenn",
            "żyto",
            "żytni",
            "jęczmień",
            "owies",
            "owsian",
            "kasza manna",
            "kuskus",
        ),
        "laktoza": (
            "mleko",
            "mleczn",
            "ser",
            "jogurt",
            "śmietana",
            "śmietank",
            "masło",
            "kefir",
            "twaróg",
            "maślanka",
        ),
        "orzechy": ("orzechy", "orzech", "migdały", "orzeszki", "pistacje", "nerkowce"),
        "jaja": ("jajko", "jajka", "jajo", "jaja", "majonez"),
        "ryby": ("ryba", "dorsz", "łosoś", "tuńczyk", "śledź", "makrela", "pstrąg"),
        "skorupiaki": ("krewetki", "kraby", "langusty", "małże", "homary"),
        "soja": ("soja", "sojow", "tofu", "miso", "edamame"),
        "seler": ("seler", "selera"),
        "gorczyca": ("gorczyca", "musztarda"),
        "sezam": ("sezam", "tahini"),
    }
)

_MEAT_KEYWORDS = (
    "mięso",
    "mięsa",
    "kurczak",
    "indyk",
    "wołowina",
    "wieprzowina",
    "cielęcina",
    "szynka",
    "boczek",
    "kiełbasa",
    "salami",
    "smalec",
)
_FISH_KEYWORDS = ("ryba", "dorsz", "łosoś", "tuńczyk", "śledź", "krewetki")
_DAIRY_KEYWORDS = ("mleko", "ser", "jogurt", "śmietana", "masło", "kefir", "twaróg")
_EGG_KEYWORDS = ("jajko", "jajka", "jajo")
_GLUTEN_KEYWORDS = ("mąka", "chleb", "makaron", "pszenica", "pszenn", "kuskus")

DIET_KEYWORDS: MappingProxyType[str, tuple[str, ...]] = MappingProxyType(
    {
        "wegetariańska": _MEAT_KEYWORDS + _FISH_KEYWORDS + ("żelatyna",),
        "wegańska": _MEAT_KEYWORDS
        + _FISH_KEYWORDS
        + _DAIRY_KEYWORDS
        + _EGG_KEYWORDS
        + ("miód", "żelatyna"),
        "bezglutenowa": _GLUTEN_KEYWORDS,
        "bezlaktozowa": ("mleko", "ser", "jogurt", "śmietana", "masło"),
    }
)

# English names accepted for the canonical Polish keys above.
ALLERGEN_ALIASES: MappingProxyType[str, str] = MappingProxyType(
    {
        "lactose": "laktoza",
        "nuts": "orzechy",
        "eggs": "jaja",
        "fish": "ryby",
        "shellfish": "skorupiaki",
        "soy": "soja",
        "celery": "seler",
        "mustard": "gorczyca",
        "sesame": "sezam",
    }
)
DIET_ALIASES: MappingProxyType[str, str] = MappingProxyType(
    {
        "vegetarian": "wegetariańska",
        "vegan": "wegańska",
        "gluten-free": "bezglutenowa",
        "lactose-free": "bezlaktozowa",
    }
)


def allergen_keywords(allergy: str) -> tuple[str, ...]:
    """Return the declared allergen itself plus its known synonyms."""
    key = normalize_name(allergy)
    if not key:
        return ()
    canonical = ALLERGEN_ALIASES.get(key, key)
    return (key, *ALLERGEN_KEYWORDS.get(canonical, ()))


def diet_keywords(diet: str) -> tuple[str, ...]:
    """Return keywords forbidden by a diet, empty for unknown diets."""
    key = normalize_name(diet)
    return DIET_KEYWORDS.get(DIET_ALIASES.get(key, key), ())


def contains_any(name: str, keywords: tuple[str, ...]) -> bool:
    """Return True when the case-folded name contains any keyword."""
    normalized = normalize_name(name)
    return any(keyword in normalized for keyword in keywords)


def allergy_warning_for(ingredient_name: str, allergies: list[str]) -> str | None:
    """Return the per-ingredient allergy note for the first matching allergen."""
    for allergy in allergies:
        if contains_any(ingredient_name, allergen_keywords(allergy)):
            return f"Ten składnik może zawierać {allergy}!"
    return None


@dataclass
class WarningGenerator:
    """Cross-references ingredient names with a user's allergies and diets."""

    def generate(
        self,
        ingredients: list[RecipeIngredient],
        allergies: list[str],
        diets: list[str],
    ) -> list[RecipeWarning]:
        """Return one warning per matching (ingredient, restriction) pair."""
        warnings: list[RecipeWarning] = []
        for ingredient in ingredients:
            for allergy in allergies:
                if contains_any(ingredient.name, allergen_keywords(allergy)):
                    warnings.append(
                        RecipeWarning(
                            type="allergy",
                            message=(
                                f'Przepis zawiera składnik "{ingredient.name}" '
                                f"- możliwa alergia na {allergy}!"
                            ),
                        )
                    )
            for diet in diets:
                if contains_any(ingredient.name, diet_keywords(diet)):
                    warnings.append(
                        RecipeWarning(
                            type="diet",
                            message=(
                                f'Przepis zawiera składnik "{ingredient.name}" '
                                f"- niezgodny z dietą {diet}!"
                            ),
                        )
                    )
        return warnings
