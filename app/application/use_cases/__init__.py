"""
Casos de uso de la aplicacion.
"""
from .auth_use_cases import AuthUseCases
from .account_use_cases import AccountUseCases
from .project_use_cases import ProjectUseCases
from .update_use_cases import UpdateUseCases
from .book_use_cases import BookUseCases

__all__ = ["AuthUseCases", "AccountUseCases", "ProjectUseCases", "UpdateUseCases", "BookUseCases"]
