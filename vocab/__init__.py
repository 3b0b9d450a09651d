"""
Vocab - spaced-repetition review core for a vocabulary flashcard app.

Quick start:
    from vocab.config import load_settings
    from vocab.review import ReviewController, ReviewMode
    from vocab.store import WordStore

    store = WordStore.from_settings(load_settings())
    controller = ReviewController(store)
    controller.enter()
    controller.start(ReviewMode.RECOMMENDED_REVIEW)
"""

__version__ = "0.3.0"
