"""
Localized message table for API errors and notices
"""

from typing import Optional

from datepoll.core.config import settings
from datepoll.core.errors import ErrorKind

LOCALES = ("mn", "en")

MESSAGES = {
    "en": {
        ErrorKind.TITLE_LENGTH: "Title must be between 3 and 255 characters",
        ErrorKind.DESCRIPTION_LENGTH: "Description must be at most 500 characters",
        ErrorKind.FIELD_LENGTH: "Location and owner name must be at most 255 characters",
        ErrorKind.DATES_REQUIRED: "At least one date is required",
        ErrorKind.INVALID_DATE: "Each date needs a valid start time",
        ErrorKind.END_BEFORE_START: "End time must be after start time",
        ErrorKind.DUPLICATE_DATE: "The same date and time was added more than once",
        ErrorKind.UNKNOWN_DATE: "One of the dates does not belong to this event",
        ErrorKind.NAME_LENGTH: "Name is required and must be less than 100 characters",
        ErrorKind.INVALID_STATUS: "Availability must be yes, maybe or no",
        ErrorKind.DUPLICATE_RESPONSE_DATE: "Each date can only be answered once",
        ErrorKind.INVALID_REQUEST: "Invalid request",
        ErrorKind.MISSING_ACCESS_FIELDS: "Edit token and fingerprint are required",
        ErrorKind.TOKEN_REQUIRED: "Edit token is required",
        ErrorKind.INVALID_TOKEN: "Invalid edit token",
        ErrorKind.DEVICE_MISMATCH: "Your device does not match the device that created this event",
        ErrorKind.EVENT_NOT_FOUND: "Event not found",
        ErrorKind.ALREADY_DELETED: "This event has already been deleted",
        ErrorKind.NAME_TAKEN: "This name has already been used. Please use a different name.",
        ErrorKind.STORAGE_FAILURE: "Server error occurred. Please try again",
        ErrorKind.INTERNAL: "Internal server error",
        "access_granted": "Access granted",
        "access_device_mismatch": "Device mismatch. This event can only be edited from the device that created it.",
        "response_submitted": "Response submitted successfully",
    },
    "mn": {
        ErrorKind.TITLE_LENGTH: "Эвентийн нэр 3-255 тэмдэгт байх ёстой",
        ErrorKind.DESCRIPTION_LENGTH: "Тайлбар 500 тэмдэгтээс ихгүй байх ёстой",
        ErrorKind.FIELD_LENGTH: "Байршил болон нэр 255 тэмдэгтээс ихгүй байх ёстой",
        ErrorKind.DATES_REQUIRED: "Дор хаяж нэг огноо сонгоно уу",
        ErrorKind.INVALID_DATE: "Огноо бүр зөв эхлэх цагтай байх ёстой",
        ErrorKind.END_BEFORE_START: "Дуусах цаг эхлэх цагаас хойш байх ёстой",
        ErrorKind.DUPLICATE_DATE: "Ижил огноо, цаг давхар орсон байна",
        ErrorKind.UNKNOWN_DATE: "Огнооны нэг нь энэ эвентэд хамаарахгүй байна",
        ErrorKind.NAME_LENGTH: "Нэр заавал бөгөөд 100 тэмдэгтээс бага байх ёстой",
        ErrorKind.INVALID_STATUS: "Хариулт нь тийм, магадгүй, үгүй байх ёстой",
        ErrorKind.DUPLICATE_RESPONSE_DATE: "Огноо бүрт нэг л удаа хариулна",
        ErrorKind.INVALID_REQUEST: "Хүсэлт буруу байна",
        ErrorKind.MISSING_ACCESS_FIELDS: "Засварлах түлхүүр болон төхөөрөмжийн мэдээлэл шаардлагатай",
        ErrorKind.TOKEN_REQUIRED: "Засварлах түлхүүр шаардлагатай",
        ErrorKind.INVALID_TOKEN: "Засварлах түлхүүр буруу байна",
        ErrorKind.DEVICE_MISMATCH: "Таны төхөөрөмж үүсгэсэн төхөөрөмжтэй таарахгүй байна",
        ErrorKind.EVENT_NOT_FOUND: "Эвент олдсонгүй",
        ErrorKind.ALREADY_DELETED: "Энэ эвент аль хэдийн устгагдсан байна",
        ErrorKind.NAME_TAKEN: "Энэ нэр ашиглагдсан байна. Өөр нэр оруулна уу.",
        ErrorKind.STORAGE_FAILURE: "Серверийн алдаа гарлаа. Дахин оролдоно уу",
        ErrorKind.INTERNAL: "Серверийн алдаа гарлаа",
        "access_granted": "Та энэ эвентийг засварлах боломжтой",
        "access_device_mismatch": "Энэ эвентийг зөвхөн үүсгэсэн компьютер, хөтчөөс засварлах боломжтой",
        "response_submitted": "Таны хариулт амжилттай илгээгдлээ",
    },
}


def resolve_locale(value: Optional[str]) -> str:
    """Return a supported locale, falling back to the configured default"""
    if value in LOCALES:
        return value
    return settings.DEFAULT_LOCALE if settings.DEFAULT_LOCALE in LOCALES else "mn"


def translate(key, locale: Optional[str] = None) -> str:
    table = MESSAGES[resolve_locale(locale)]
    return table.get(key) or MESSAGES["en"][key]
