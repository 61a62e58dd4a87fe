from django.core.exceptions import ValidationError
from django.core.validators import FileExtensionValidator
from django.utils.deconstruct import deconstructible

OFFICIAL_LETTER_EXTENSIONS = ["pdf", "jpg", "jpeg", "png"]
OFFICIAL_LETTER_MAX_MB = 5

DOCUMENT_EXTENSIONS = ["pdf", "jpg", "jpeg", "png", "doc", "docx"]
DOCUMENT_MAX_MB = 10


@deconstructible
class MaxFileSizeValidator:
    message = "File size must be less than %(limit)s MB."
    code = "file_too_large"

    def __init__(self, limit_mb):
        self.limit_mb = limit_mb

    def __call__(self, value):
        size = getattr(value, "size", None)
        if size is not None and size > self.limit_mb * 1024 * 1024:
            raise ValidationError(
                self.message, code=self.code, params={"limit": self.limit_mb}
            )

    def __eq__(self, other):
        return isinstance(other, MaxFileSizeValidator) and self.limit_mb == other.limit_mb


validate_official_letter_type = FileExtensionValidator(OFFICIAL_LETTER_EXTENSIONS)
validate_official_letter_size = MaxFileSizeValidator(OFFICIAL_LETTER_MAX_MB)
validate_document_type = FileExtensionValidator(DOCUMENT_EXTENSIONS)
validate_document_size = MaxFileSizeValidator(DOCUMENT_MAX_MB)
