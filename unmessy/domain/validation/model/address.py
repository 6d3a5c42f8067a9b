from unmessy.domain.shared.model.value import ValueObject


class NormalizedAddress(ValueObject):
    address: str
    was_corrected: bool

    @property
    def domain(self) -> str | None:
        local, sep, domain = self.address.rpartition("@")
        return domain if sep and local else None


class CheckIdParts(ValueObject):
    timestamp: str
    client_id: str
    checksum: str
    version: str
