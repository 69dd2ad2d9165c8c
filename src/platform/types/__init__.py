from src.platform.types.uuid7_utils_types import UtilsUUID7, to_std_uuid, to_utils_uuid

__all__ = ['UtilsUUID7', 'to_std_uuid', 'to_utils_uuid']
