"""Constants for the cohorts app"""

CONDITION_OPERATOR_TEXT_IS_EQUAL_TO = "text_is_equal_to"
CONDITION_OPERATOR_TEXT_CONTAINS = "text_contains"
CONDITION_OPERATOR_DATE_IN_THE_FUTURE = "date_in_the_future"
CONDITION_OPERATOR_DATE_IN_THE_PAST = "date_in_the_past"
CONDITION_OPERATORS = [
    CONDITION_OPERATOR_TEXT_IS_EQUAL_TO,
    CONDITION_OPERATOR_TEXT_CONTAINS,
    CONDITION_OPERATOR_DATE_IN_THE_FUTURE,
    CONDITION_OPERATOR_DATE_IN_THE_PAST,
]
CONDITION_OPERATOR_CHOICES = list(zip(CONDITION_OPERATORS, CONDITION_OPERATORS))

# conditions reference user profile fields as "profile_field_<shortname>"
PROFILE_FIELD_CONDITION_PREFIX = "profile_field_"
