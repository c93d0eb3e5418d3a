"""
Custom Exceptions for Shiplog
=============================

Use these instead of generic Exception so the API layer can map each
failure to a status code and a stable error code.

Usage:
    from app.core.exceptions import ItemNotFoundError

    if not item:
        raise ItemNotFoundError(item_id)
"""

from typing import Optional, Any, Dict, List


class ShiplogError(Exception):
    """Base exception for all Shiplog errors"""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details
        }


# ============================================
# Resource Errors (404-type)
# ============================================

class ResourceNotFoundError(ShiplogError):
    """Base class for not found errors"""

    status_code = 404

    def __init__(self, resource_type: str, resource_id: str):
        super().__init__(
            f"{resource_type} with ID '{resource_id}' not found",
            code=f"{resource_type.upper()}_NOT_FOUND",
            details={"resource_type": resource_type, "resource_id": resource_id}
        )


class ItemNotFoundError(ResourceNotFoundError):
    """Work item not found"""

    def __init__(self, item_id: str):
        super().__init__("Item", item_id)


class CategoryNotFoundError(ResourceNotFoundError):
    """Category not found"""

    def __init__(self, category_id: str):
        super().__init__("Category", category_id)


# ============================================
# Validation Errors (400-type)
# ============================================

class ValidationError(ShiplogError):
    """Input validation failed"""

    status_code = 400

    def __init__(self, message: str, field: Optional[str] = None):
        details = {"field": field} if field else {}
        super().__init__(message, code="VALIDATION_ERROR", details=details)


class IncompleteDataError(ValidationError):
    """Required form fields are missing"""

    def __init__(self, missing: List[str]):
        super().__init__(f"Incomplete data: {', '.join(missing)} required")
        self.code = "INCOMPLETE_DATA"
        self.details = {"missing": missing}


class InvalidStatusError(ValidationError):
    """Status is not one of the known lifecycle states"""

    def __init__(self, status: Any, allowed: List[str]):
        super().__init__(f"Invalid status '{status}'", field="status")
        self.code = "INVALID_STATUS"
        self.details["allowed"] = allowed


class InvalidItemTypeError(ValidationError):
    """Item type is not one of the known work item types"""

    def __init__(self, item_type: Any, allowed: List[str]):
        super().__init__(f"Invalid item type '{item_type}'", field="type")
        self.code = "INVALID_ITEM_TYPE"
        self.details["allowed"] = allowed


class UploadTooLargeError(ValidationError):
    """Uploaded image exceeds MAX_UPLOAD_SIZE"""

    status_code = 413

    def __init__(self, size: int, max_size: int):
        super().__init__(f"Image too large: {size} bytes (max {max_size})", field="image")
        self.code = "UPLOAD_TOO_LARGE"
        self.details.update({"size": size, "max_size": max_size})


# ============================================
# Storage Errors
# ============================================

class StorageError(ShiplogError):
    """Object storage operation failed"""

    status_code = 502

    def __init__(self, message: str):
        super().__init__(message, code="STORAGE_ERROR")


class ImageUploadError(StorageError):
    """Image upload failed"""

    def __init__(self, key: str, message: str = "Upload failed"):
        super().__init__(f"Failed to upload image: {message}")
        self.code = "IMAGE_UPLOAD_FAILED"
        self.details["key"] = key


# ============================================
# Item Store Errors
# ============================================

class StoreNotConfiguredError(ShiplogError):
    """DATABASE_URL is not set"""

    status_code = 503

    def __init__(self):
        super().__init__("Item store is not configured", code="STORE_NOT_CONFIGURED")


# ============================================
# Helper function for API responses
# ============================================

def error_response(error: ShiplogError) -> Dict[str, Any]:
    """Convert exception to API error response format"""
    return {
        "success": False,
        "error": error.to_dict()
    }
