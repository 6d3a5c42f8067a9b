from unmessy.domain.validation.util.di.provider import ValidationProvider

__all__ = ["ValidationProvider"]
