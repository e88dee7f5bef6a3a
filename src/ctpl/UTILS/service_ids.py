"""
Service identifiers: four characters drawn from 0-9a-zA-Z.
"""
import re
import string

SERVICE_ID_LENGTH = 4
SERVICE_ID_ALPHABET = string.digits + string.ascii_lowercase + string.ascii_uppercase
SERVICE_ID_PATTERN = re.compile(r'^[0-9a-zA-Z]{%d}$' % SERVICE_ID_LENGTH)


def is_valid_service_id(service_id: str) -> bool:
    return isinstance(service_id, str) and SERVICE_ID_PATTERN.match(service_id) is not None


def next_service_id(service_id: str) -> str:
    """
    Returns the id following ``service_id``, incrementing the last character
    and carrying into the ones before it ('a009' -> 'a00a', 'a00Z' -> 'a010').

    :param service_id: A valid service id.
    :return: The next service id.
    :raises ValueError: If the id is invalid or is the last one ('ZZZZ').
    """
    if not is_valid_service_id(service_id):
        raise ValueError(f"Invalid service id: {service_id!r}")

    chars = list(service_id)
    for pos in range(len(chars) - 1, -1, -1):
        idx = SERVICE_ID_ALPHABET.index(chars[pos])
        if idx + 1 < len(SERVICE_ID_ALPHABET):
            chars[pos] = SERVICE_ID_ALPHABET[idx + 1]
            return "".join(chars)
        chars[pos] = SERVICE_ID_ALPHABET[0]
    raise ValueError(f"No service id follows {service_id!r}")
