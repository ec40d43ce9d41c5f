"""
Custom Exceptions for the Loan Collection System
"""

class LoanCollectionException(Exception):
    """Base exception for all loan collection errors"""
    def __init__(self, message: str, error_code: str = None):
        self.message = message
        self.error_code = error_code
        super().__init__(self.message)

class ValidationException(LoanCollectionException):
    """Raised when input validation fails"""
    pass

class InvalidPaymentException(ValidationException):
    """Raised when a payment amount is not acceptable for a loan"""
    pass

class SpreadsheetParseException(LoanCollectionException):
    """Raised when an uploaded spreadsheet cannot be decoded"""
    pass

class AuthenticationException(LoanCollectionException):
    """Raised when login fails"""
    pass

class AuthorizationException(LoanCollectionException):
    """Raised when user lacks permission for operation"""
    pass

class LoanNotFoundException(LoanCollectionException):
    """Raised when referenced loan does not exist"""
    pass

class AgentNotFoundException(LoanCollectionException):
    """Raised when referenced agent does not exist"""
    pass

class StorageException(LoanCollectionException):
    """Raised when the document store cannot be written"""
    pass
