import re

from unmessy.domain.shared.service import Service

MAX_ADDRESS_LENGTH = 254
MAX_LOCAL_LENGTH = 64
MAX_DOMAIN_LENGTH = 253
MAX_LABEL_LENGTH = 63

_LOCAL_CHARS = re.compile(r"[a-z0-9!#$%&'*+/=?^_`{|}~.-]+")
_LABEL = re.compile(r"[a-z0-9](?:[a-z0-9-]*[a-z0-9])?")
_TLD = re.compile(r"[a-z]{2,}")


class FormatChecker(Service):
    """RFC-5322-lite grammar for normalized addresses.

    Deliberately narrower than the RFC: no quoted local parts, no comments,
    no IP-literal domains.
    """

    def is_valid(self, address: str) -> bool:
        return self.problem(address) is None

    def problem(self, address: str) -> str | None:
        """Describe the first rule the address breaks, or None if it passes."""
        if len(address) > MAX_ADDRESS_LENGTH:
            return "address longer than 254 characters"
        if address.count("@") != 1:
            return "address must contain exactly one @"

        local, domain = address.split("@")

        if not local or len(local) > MAX_LOCAL_LENGTH:
            return "local part must be 1-64 characters"
        if not _LOCAL_CHARS.fullmatch(local):
            return "local part contains invalid characters"
        if local.startswith(".") or local.endswith(".") or ".." in local:
            return "local part has a misplaced dot"

        if not domain or len(domain) > MAX_DOMAIN_LENGTH:
            return "domain must be 1-253 characters"
        labels = domain.split(".")
        if len(labels) < 2:
            return "domain needs at least two labels"
        for label in labels:
            if not label or len(label) > MAX_LABEL_LENGTH:
                return "domain label must be 1-63 characters"
            if not _LABEL.fullmatch(label):
                return f"invalid domain label {label!r}"
        if not _TLD.fullmatch(labels[-1]):
            return "top-level domain must be alphabetic"

        return None
