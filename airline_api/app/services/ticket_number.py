"""Generator for printable ticket numbers."""

import secrets
import string

_LETTERS = string.ascii_uppercase
_DIGITS = string.digits


def generate_ticket_number() -> str:
    """Return a candidate ticket number such as ``"KX402913"``.

    Two uppercase letters followed by six digits.  Uniqueness is not
    guaranteed here; ``TicketService`` checks each candidate against
    stored tickets.
    """
    prefix = "".join(secrets.choice(_LETTERS) for _ in range(2))
    suffix = "".join(secrets.choice(_DIGITS) for _ in range(6))
    return prefix + suffix
