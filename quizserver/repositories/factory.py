from ..core.config import Settings, settings as default_settings
from ..core.supabase_client import get_supabase
from .filesystem_repository import FileQuizRepository
from .quiz_repository import QuizRepository
from .supabase_repository import SupabaseQuizRepository


def build_repository(settings: Settings = default_settings) -> QuizRepository:
    if settings.STORAGE_BACKEND == "supabase":
        return SupabaseQuizRepository(get_supabase(settings), settings.STORAGE_BUCKET)
    return FileQuizRepository(settings.QUIZZES_DIR)
