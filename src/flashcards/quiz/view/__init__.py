from .app import FlashcardsApp, QuizScreen, SetSelectionScreen

__all__ = ["FlashcardsApp", "QuizScreen", "SetSelectionScreen"]
