"""User constants"""

USERNAME_MAX_LEN = 30

PROFILE_FIELD_DATATYPE_AUTOCOMPLETE = "autocomplete"
PROFILE_FIELD_DATATYPE_DATETIME = "datetime"
PROFILE_FIELD_DATATYPE_TEXT = "text"
PROFILE_FIELD_DATATYPE_CHOICES = [
    (PROFILE_FIELD_DATATYPE_AUTOCOMPLETE, "Autocomplete"),
    (PROFILE_FIELD_DATATYPE_DATETIME, "Date/Time"),
    (PROFILE_FIELD_DATATYPE_TEXT, "Text"),
]

# allowed values of an autocomplete field are stored one per line
PROFILE_FIELD_OPTIONS_SEPARATOR = "\n"
# a user's selected values are stored as a single delimited string
PROFILE_FIELD_DATA_SEPARATOR = ", "
