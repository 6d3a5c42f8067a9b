"""Address normalizer: deterministic, total, idempotent.

Steps, in order:
1. trim and lowercase
2. remove internal whitespace
3. split into local part / domain (only for exactly one "@")
4. exact-match domain typo table
5. strip "+tag" aliases for alias-aware providers (optional)
6. restore the dot in stripped country suffixes, e.g. ``.comau`` (optional)
"""

import re

from unmessy.domain.shared.service import Service
from unmessy.domain.validation.model import NormalizedAddress

DOMAIN_TYPOS: dict[str, str] = {
    "gmial.com": "gmail.com",
    "gmal.com": "gmail.com",
    "gmail.cm": "gmail.com",
    "gmail.co": "gmail.com",
    "gamil.com": "gmail.com",
    "hotmial.com": "hotmail.com",
    "hotmail.cm": "hotmail.com",
    "yahoo.cm": "yahoo.com",
    "yaho.com": "yahoo.com",
    "outlook.cm": "outlook.com",
    "outlok.com": "outlook.com",
}

# Providers that deliver user+tag@ to user@
ALIAS_DELIMITERS: dict[str, str] = {
    "gmail.com": "+",
    "googlemail.com": "+",
    "outlook.com": "+",
    "hotmail.com": "+",
    "live.com": "+",
}

# Stripped-dot suffix -> canonical suffix. Longest first.
COUNTRY_SUFFIXES: tuple[tuple[str, str], ...] = (
    ("comau", "com.au"),
    ("netau", "net.au"),
    ("orgau", "org.au"),
    ("eduau", "edu.au"),
    ("govau", "gov.au"),
    ("asnau", "asn.au"),
    ("couk", "co.uk"),
    ("orguk", "org.uk"),
    ("conz", "co.nz"),
    ("idau", "id.au"),
)

_WHITESPACE = re.compile(r"\s+")


class Normalizer(Service):
    remove_aliases: bool = True
    normalize_country_tlds: bool = True

    def normalize(self, raw: str) -> NormalizedAddress:
        address = _WHITESPACE.sub("", raw.strip().lower())

        if address.count("@") == 1:
            local, domain = address.split("@")
            domain = DOMAIN_TYPOS.get(domain, domain)
            if self.remove_aliases:
                local = self._strip_alias(local, domain)
            if self.normalize_country_tlds:
                domain = self._restore_country_suffix(domain)
            address = f"{local}@{domain}"

        return NormalizedAddress(address=address, was_corrected=address != raw)

    @staticmethod
    def _strip_alias(local: str, domain: str) -> str:
        delimiter = ALIAS_DELIMITERS.get(domain)
        if delimiter is None:
            return local
        base = local.split(delimiter, 1)[0]
        return base or local

    @staticmethod
    def _restore_country_suffix(domain: str) -> str:
        for stripped, canonical in COUNTRY_SUFFIXES:
            # Only "name.comau", never "example.com.au" or a bare "comau"
            if domain.endswith(f".{stripped}"):
                return domain[: -len(stripped)] + canonical
        return domain
