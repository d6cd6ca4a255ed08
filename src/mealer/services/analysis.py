"""Recipe-versus-pantry analysis with usage metering."""

from dataclasses import dataclass, replace

from mealer.domain.analysis import IngredientAnalysis, RecipeWarning
from mealer.domain.profiles import ProfileRecord
from mealer.domain.recipes import RecipeIngredient
from mealer.domain.usage import RateLimitCheck
from mealer.services.inventory import InventoryService
from mealer.services.recipe_warnings import WarningGenerator, allergy_warning_for
from mealer.services.resolver import IngredientResolver
from mealer.services.usage import DailyLimitExceededError, UsageLedger


@dataclass(frozen=True)
class SubstitutionAnalysisResult:
    """Complete answer for one analysis request."""

    ingredients: list[IngredientAnalysis]
    warnings: list[RecipeWarning]
    usage: RateLimitCheck


@dataclass
class SubstitutionService:
    """Runs the substitution analysis for a user's recipe."""

    usage_ledger: UsageLedger
    inventory_service: InventoryService
    resolver: IngredientResolver
    warning_generator: WarningGenerator

    def analyze(
        self, profile: ProfileRecord, ingredients: list[RecipeIngredient]
    ) -> SubstitutionAnalysisResult:
        """Check quota, analyze ingredients, then count the request."""
        user_id = profile.user_id
        check = self.usage_ledger.check_limit(user_id, "substitutions")
        if not check.allowed:
            raise DailyLimitExceededError("substitutions", check)

        inventory = self.inventory_service.snapshot(user_id)
        available = [item for item in inventory if item.is_available]
        # One record per input line, in input order, duplicates included.
        analyses = [
            replace(
                self.resolver.analyze(ingredient, available),
                allergy_warning=allergy_warning_for(
                    ingredient.name, profile.allergies
                ),
            )
            for ingredient in ingredients
        ]
        warnings = self.warning_generator.generate(
            ingredients, profile.allergies, profile.diets
        )

        self.usage_ledger.record_usage(user_id, "substitutions")
        return SubstitutionAnalysisResult(
            ingredients=analyses,
            warnings=warnings,
            usage=self.usage_ledger.check_limit(user_id, "substitutions"),
        )
