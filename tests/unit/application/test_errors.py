from unmessy.application.api.v1.errors import map_unmessy_error
from unmessy.domain.shared.error import (
    ConfigurationError,
    NotFoundError,
    UnmessyError,
    ValidationError,
)
from unmessy.domain.validation.error import OracleTimeout


class TestMapUnmessyError:
    def test_validation_error_carries_field(self):
        exc = map_unmessy_error(ValidationError("bad", field="address"))

        assert exc.status_code == 422
        assert exc.detail == {"code": "VALIDATION_ERROR", "message": "bad", "field": "address"}

    def test_not_found(self):
        assert map_unmessy_error(NotFoundError("missing")).status_code == 404

    def test_infrastructure_errors_are_503(self):
        assert map_unmessy_error(OracleTimeout("slow")).status_code == 503
        assert map_unmessy_error(ConfigurationError("broken")).status_code == 503

    def test_unknown_subclass_is_500(self):
        assert map_unmessy_error(UnmessyError("?")).status_code == 500
