"""Status and error code enums reported by the update service."""

from enum import IntEnum, IntFlag
from typing import Union


class UpdateStatus(IntEnum):
    """Update progress states pushed through onStatusUpdate.

    Purely informational: the client never decides its exit code from these.
    """

    IDLE = 0
    CHECKING_FOR_UPDATE = 1
    UPDATE_AVAILABLE = 2
    DOWNLOADING = 3
    VERIFYING = 4
    FINALIZING = 5
    UPDATED_NEED_REBOOT = 6
    REPORTING_ERROR_EVENT = 7
    ATTEMPTING_ROLLBACK = 8
    DISABLED = 9
    NEED_PERMISSION_TO_UPDATE = 10


class ErrorCode(IntEnum):
    """Result of a payload application. Zero is success, anything else failed."""

    SUCCESS = 0
    ERROR = 1
    OMAHA_REQUEST_ERROR = 2
    OMAHA_RESPONSE_HANDLER_ERROR = 3
    FILESYSTEM_COPIER_ERROR = 4
    POSTINSTALL_RUNNER_ERROR = 5
    PAYLOAD_MISMATCHED_TYPE = 6
    INSTALL_DEVICE_OPEN_ERROR = 7
    KERNEL_DEVICE_OPEN_ERROR = 8
    DOWNLOAD_TRANSFER_ERROR = 9
    PAYLOAD_HASH_MISMATCH_ERROR = 10
    PAYLOAD_SIZE_MISMATCH_ERROR = 11
    DOWNLOAD_PAYLOAD_VERIFICATION_ERROR = 12
    DOWNLOAD_NEW_PARTITION_INFO_ERROR = 13
    DOWNLOAD_WRITE_ERROR = 14
    NEW_ROOTFS_VERIFICATION_ERROR = 15
    NEW_KERNEL_VERIFICATION_ERROR = 16
    SIGNED_DELTA_PAYLOAD_EXPECTED_ERROR = 17
    DOWNLOAD_PAYLOAD_PUB_KEY_VERIFICATION_ERROR = 18
    POSTINSTALL_BOOTED_FROM_FIRMWARE_B = 19
    DOWNLOAD_STATE_INITIALIZATION_ERROR = 20
    DOWNLOAD_INVALID_METADATA_MAGIC_STRING = 21
    DOWNLOAD_SIGNATURE_MISSING_IN_MANIFEST = 22
    DOWNLOAD_MANIFEST_PARSE_ERROR = 23
    DOWNLOAD_METADATA_SIGNATURE_ERROR = 24
    DOWNLOAD_METADATA_SIGNATURE_VERIFICATION_ERROR = 25
    DOWNLOAD_METADATA_SIGNATURE_MISMATCH = 26
    DOWNLOAD_OPERATION_HASH_VERIFICATION_ERROR = 27
    DOWNLOAD_OPERATION_EXECUTION_ERROR = 28
    DOWNLOAD_OPERATION_HASH_MISMATCH = 29
    OMAHA_REQUEST_EMPTY_RESPONSE_ERROR = 30
    OMAHA_REQUEST_XML_PARSE_ERROR = 31
    DOWNLOAD_INVALID_METADATA_SIZE = 32
    DOWNLOAD_INVALID_METADATA_SIGNATURE = 33
    OMAHA_RESPONSE_INVALID = 34
    OMAHA_UPDATE_IGNORED_PER_POLICY = 35
    OMAHA_UPDATE_DEFERRED_PER_POLICY = 36
    OMAHA_ERROR_IN_HTTP_RESPONSE = 37
    DOWNLOAD_OPERATION_HASH_MISSING_ERROR = 38
    DOWNLOAD_METADATA_SIGNATURE_MISSING_ERROR = 39
    OMAHA_UPDATE_DEFERRED_FOR_BACKOFF = 40
    POSTINSTALL_POWERWASH_ERROR = 41
    UPDATE_CANCELED_BY_CHANNEL_CHANGE = 42
    POSTINSTALL_FIRMWARE_RO_NOT_UPDATABLE = 43
    UNSUPPORTED_MAJOR_PAYLOAD_VERSION = 44
    UNSUPPORTED_MINOR_PAYLOAD_VERSION = 45
    OMAHA_REQUEST_XML_HAS_ENTITY_DECL = 46
    FILESYSTEM_VERIFIER_ERROR = 47
    USER_CANCELED = 48
    NON_CRITICAL_UPDATE_IN_OOBE = 49
    OMAHA_UPDATE_IGNORED_OVER_CELLULAR = 50
    PAYLOAD_TIMESTAMP_ERROR = 51
    UPDATED_BUT_NOT_ACTIVE = 52


class ErrorCodeFlag(IntFlag):
    """Bits the service may OR into an ErrorCode (top of the int32)."""

    TEST_OMAHA_URL = 1 << 28
    TEST_IMAGE = 1 << 29
    RESUMED = 1 << 30
    DEV_MODE = 1 << 31


SPECIAL_FLAGS = (
    ErrorCodeFlag.TEST_OMAHA_URL
    | ErrorCodeFlag.TEST_IMAGE
    | ErrorCodeFlag.RESUMED
    | ErrorCodeFlag.DEV_MODE
)


def _describe(enum_cls, value: int) -> str:
    try:
        member = enum_cls(value)
    except ValueError:
        return f"UNKNOWN({value})"
    return f"{member.name} ({int(member)})"


def split_error_code(error_code: int) -> tuple[int, ErrorCodeFlag]:
    """Split a raw (possibly negative int32) code into base code and flag bits."""
    raw = int(error_code) & 0xFFFFFFFF
    return raw & ~int(SPECIAL_FLAGS), ErrorCodeFlag(raw & int(SPECIAL_FLAGS))


def describe_status(status: Union[int, UpdateStatus]) -> str:
    """Render a status code as ``NAME (n)``, tolerating unknown values."""
    return _describe(UpdateStatus, int(status))


def describe_error_code(error_code: Union[int, ErrorCode]) -> str:
    """Render an error code as ``NAME (n)``, tolerating unknown values.

    Flag bits are masked off the base code and listed after it, e.g.
    ``DOWNLOAD_TRANSFER_ERROR (9) [DEV_MODE]``.
    """
    base, flags = split_error_code(error_code)
    text = _describe(ErrorCode, base)
    if flags:
        names = [flag.name for flag in ErrorCodeFlag if flag in flags]
        text = f"{text} [{'|'.join(names)}]"
    return text
