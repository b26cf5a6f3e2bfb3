"""
Sets up profile based enrolment from scratch.

Optionally cleans up first by deleting every cohort enrollment method, rule,
cohort and the enrolprofile profile fields. Then creates the profile fields,
a cohort and rule for every category, course, tag and preset, and the
enrollment methods for every course.

Without --run nothing is changed and the command only reports what it would do.
"""

from django.core.management import BaseCommand, CommandError
from django.db import transaction

from cohorts.models import Cohort, CohortEnrollmentMethod, CohortRule
from courses.api import get_student_role
from enrolprofile import api
from enrolprofile.constants import ItemType
from users.api import get_profile_field


class Command(BaseCommand):
    """Sets up cohorts, rules, profile fields and enrollment methods for profile based enrolment"""

    help = "Sets up cohorts, rules, profile fields and enrollment methods for profile based enrolment"

    def add_arguments(self, parser):
        """Add arguments to the command"""

        parser.add_argument(
            "--run",
            action="store_true",
            help="Execute the set up. Without this option nothing is changed.",
        )
        parser.add_argument(
            "--skip-cleanup",
            action="store_true",
            help="Don't delete existing cohorts, rules, enrollment methods and profile fields first.",
        )
        parser.add_argument(
            "--only-cleanup",
            action="store_true",
            help="Only delete existing cohorts, rules, enrollment methods and profile fields.",
        )

    def handle(self, *args, **options):  # noqa: ARG002
        """Clean up and set up in a single transaction"""

        run = options["run"]
        skip_cleanup = options["skip_cleanup"]
        only_cleanup = options["only_cleanup"]

        if skip_cleanup and only_cleanup:
            msg = "--skip-cleanup and --only-cleanup can't be used together"
            raise CommandError(msg)

        if not run:
            self.stdout.write(
                self.style.WARNING("Dry run mode on - no database changes will be made.")
            )

        with transaction.atomic():
            if not skip_cleanup:
                self.clean_up(run)
            if not only_cleanup:
                self.set_up(run)

        self.stdout.write(self.style.SUCCESS("Done"))

    def clean_up(self, run):
        """Delete existing cohorts, rules, enrollment methods and profile fields"""
        if not run:
            self.stdout.write(
                f"Will delete {CohortEnrollmentMethod.objects.count()} cohort enrollment methods, "
                f"{CohortRule.objects.count()} rules and {Cohort.objects.count()} cohorts"
            )
            self.stdout.write(
                f"Will delete profile fields {', '.join(api.get_engine_profile_fields())}"
            )
            return

        counts = api.clean_up()
        self.stdout.write(
            f"Deleted {counts['enrollment_methods']} cohort enrollment methods, "
            f"{counts['rules']} rules and {counts['cohorts']} cohorts"
        )
        self.stdout.write(f"Deleted {counts['profile_fields']} profile fields")

    def set_up(self, run):
        """Create profile fields, then cohorts, rules and enrollment methods for every item"""
        if not run:
            for shortname in api.get_engine_profile_fields():
                if get_profile_field(shortname) is None:
                    self.stdout.write(f"Will create profile field '{shortname}'")
                else:
                    self.stdout.write(
                        f"Profile field '{shortname}' already exists. Skipping."
                    )
            for item_type in ItemType:
                self.stdout.write(
                    f"Will set up {len(api.get_items(item_type))} {item_type.label.lower()} cohorts"
                )
            return

        for shortname, created in api.set_up_profile_fields().items():
            if created:
                self.stdout.write(f"Created profile field '{shortname}'")
            else:
                self.stdout.write(f"Profile field '{shortname}' already exists. Skipping.")

        counts = api.set_up_items(get_student_role())
        for item_type, count in counts.items():
            self.stdout.write(
                f"Set up {count} {ItemType(item_type).label.lower()} cohorts"
            )
