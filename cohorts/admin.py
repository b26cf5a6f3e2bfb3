"""Admin for cohorts"""

from django.contrib import admin
from mitol.common.admin import TimestampedModelAdmin

from cohorts.models import Cohort, CohortEnrollmentMethod, CohortRule, RuleCondition


class RuleConditionInline(admin.TabularInline):
    """Admin inline for the conditions of a rule"""

    model = RuleCondition
    extra = 0


class CohortEnrollmentMethodInline(admin.TabularInline):
    """Admin inline for the enrollment methods of a cohort"""

    model = CohortEnrollmentMethod
    raw_id_fields = ("course",)
    extra = 0


@admin.register(Cohort)
class CohortAdmin(TimestampedModelAdmin):
    """Admin for Cohort"""

    model = Cohort
    search_fields = ["name", "idnumber"]
    list_display = ("id", "name", "item_type", "item_id")
    list_filter = ["item_type"]
    inlines = [CohortEnrollmentMethodInline]


@admin.register(CohortRule)
class CohortRuleAdmin(TimestampedModelAdmin):
    """Admin for CohortRule"""

    model = CohortRule
    search_fields = ["name"]
    list_display = ("id", "name", "cohort", "enabled")
    list_filter = ["enabled"]
    raw_id_fields = ("cohort",)
    inlines = [RuleConditionInline]
