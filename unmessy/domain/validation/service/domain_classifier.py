from dataclasses import field

from unmessy.domain.shared.service import Service
from unmessy.domain.validation.model import DomainClass

ALLOWLIST: frozenset[str] = frozenset(
    {
        "gmail.com",
        "googlemail.com",
        "outlook.com",
        "hotmail.com",
        "live.com",
        "msn.com",
        "yahoo.com",
        "icloud.com",
        "me.com",
        "mac.com",
        "aol.com",
        "protonmail.com",
        "pm.me",
        "fastmail.com",
        "mail.com",
        "zoho.com",
        "yandex.com",
        "gmx.com",
        "tutanota.com",
        "mailbox.org",
    }
)

# Placeholder and disposable-inbox domains
DENYLIST: frozenset[str] = frozenset(
    {
        "example.com",
        "example.org",
        "example.net",
        "test.com",
        "mailinator.com",
        "guerrillamail.com",
        "guerrillamail.net",
        "sharklasers.com",
        "10minutemail.com",
        "tempmail.com",
        "temp-mail.org",
        "throwawaymail.com",
        "trashmail.com",
        "yopmail.com",
        "getnada.com",
        "dispostable.com",
        "maildrop.cc",
        "fakeinbox.com",
    }
)

# RFC 2606 / RFC 6761 names that never route mail
RESERVED_TLDS: frozenset[str] = frozenset({"test", "example", "invalid", "localhost", "local"})


class DomainClassifier(Service):
    extra_allow: frozenset[str] = field(default_factory=frozenset)
    extra_deny: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        self._allow = ALLOWLIST | {d.lower() for d in self.extra_allow}
        self._deny = DENYLIST | {d.lower() for d in self.extra_deny}

    def classify(self, domain: str) -> DomainClass:
        domain = domain.lower().rstrip(".")
        # Deny wins over allow
        if domain in self._deny or domain.rpartition(".")[2] in RESERVED_TLDS:
            return DomainClass.DENYLISTED
        if domain in self._allow:
            return DomainClass.ALLOWLISTED
        return DomainClass.UNKNOWN
