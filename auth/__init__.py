from auth.models import User, Address
from auth.security import verify_password, get_password_hash
from auth.repository import RegistrationRepository
from auth.validation import validate_registration, ValidationErrors, ValidationResult
