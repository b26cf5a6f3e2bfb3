"""
Cohort models
"""

from django.db import models
from mitol.common.models import TimestampedModel, TimestampedModelQuerySet

from cohorts.constants import CONDITION_OPERATOR_CHOICES


class CohortQuerySet(TimestampedModelQuerySet):  # pylint: disable=missing-docstring
    def for_item(self, item_type, item_id):
        """Applies a filter for the Cohort bound to the given item"""
        return self.filter(item_type=item_type, item_id=item_id)


class Cohort(TimestampedModel):
    """
    A named collection of users. Cohorts created for synchronized items carry
    the (item_type, item_id) of the item they were created for.
    """

    name = models.CharField(max_length=255)
    idnumber = models.CharField(max_length=255, blank=True, default="")
    description = models.TextField(blank=True, default="")
    item_type = models.CharField(max_length=20, db_index=True)
    item_id = models.PositiveIntegerField()

    objects = CohortQuerySet.as_manager()

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["item_type", "item_id"], name="unique_cohort_per_item"
            )
        ]

    def __str__(self):
        return f"Cohort name={self.name} item={self.item_type}:{self.item_id}"


class CohortRule(TimestampedModel):
    """A dynamic membership rule for a cohort"""

    cohort = models.OneToOneField(Cohort, on_delete=models.CASCADE, related_name="rule")
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")
    enabled = models.BooleanField(default=False)

    def __str__(self):
        return f"CohortRule name={self.name} enabled={self.enabled}"


class RuleCondition(models.Model):
    """A single profile field predicate of a cohort rule"""

    rule = models.ForeignKey(
        CohortRule, on_delete=models.CASCADE, related_name="conditions"
    )
    field = models.CharField(max_length=255)
    operator = models.CharField(max_length=30, choices=CONDITION_OPERATOR_CHOICES)
    value = models.CharField(max_length=255, blank=True, default="")
    sortorder = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ["sortorder", "id"]

    def __str__(self):
        return f"RuleCondition {self.field} {self.operator} {self.value}"


class CohortEnrollmentMethod(TimestampedModel):
    """Grants every member of a cohort a role in a course"""

    cohort = models.ForeignKey(
        Cohort, on_delete=models.CASCADE, related_name="enrollment_methods"
    )
    course = models.ForeignKey(
        "courses.Course",
        on_delete=models.CASCADE,
        related_name="cohort_enrollment_methods",
    )
    role = models.ForeignKey("courses.Role", on_delete=models.PROTECT)

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["cohort", "course", "role"],
                name="unique_cohort_enrollment_method",
            )
        ]

    def __str__(self):
        return f"CohortEnrollmentMethod cohort={self.cohort_id} course={self.course_id} role={self.role_id}"
