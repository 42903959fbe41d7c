from .submit_update import SubmitUpdateUseCase

__all__ = ["SubmitUpdateUseCase"]
