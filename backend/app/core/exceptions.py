class AppError(Exception):
    """Base class for all application exceptions."""
    def __init__(self, message: str, status_code: int = 500, details: dict = None):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)

class CourseValidationError(AppError):
    """Raised when a registration cannot be committed or updated as requested."""
    def __init__(self, message: str, details: dict = None):
        super().__init__(message, status_code=422, details=details)

class UnknownSlotCodeError(AppError):
    """Raised at commit time for unresolvable slot codes when strict checking is enabled."""
    def __init__(self, slot_codes: list[str], registration_id: str):
        codes = ", ".join(slot_codes)
        super().__init__(
            f"Unknown slot code(s): {codes}",
            status_code=422,
            details={"slot_codes": slot_codes, "registration_id": registration_id},
        )

class EmptyRegistrationSetError(AppError):
    """Raised when no committed registration has a slot combination to work with."""
    def __init__(self):
        super().__init__("Please add and save at least one complete course", status_code=400)

class CannotDeleteLastError(AppError):
    """Raised when deleting would leave the planner without any registration."""
    def __init__(self, registration_id: str):
        super().__init__(
            "At least one course is required",
            status_code=409,
            details={"registration_id": registration_id},
        )

class GenerationInProgressError(AppError):
    """Raised when a timetable generation is requested while another one is pending."""
    def __init__(self):
        super().__init__("A timetable generation is already in progress", status_code=409)

class ResourceNotFoundError(AppError):
    """Raised when a requested resource is not found."""
    def __init__(self, resource_type: str, resource_id: str):
        super().__init__(f"{resource_type} with id {resource_id} not found", status_code=404)
