import re

_WORD_BOUNDARY = re.compile(r"([^\s0-9])([A-Z0-9])")


def convert_camelcase_to_human(value: str, delimiter: str = " ") -> str:
    """Turn a property key into a label: 'dateOfBirth' -> 'Date Of Birth'.

    snake_case keys are split on underscores: 'phone_number' -> 'Phone number'.
    """
    value = value.replace("_", delimiter).strip(delimiter)
    if not value:
        return value
    return value[:1].upper() + _WORD_BOUNDARY.sub(lambda m: m.group(1) + delimiter + m.group(2), value[1:])
