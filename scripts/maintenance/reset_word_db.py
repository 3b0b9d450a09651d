"""
Reset the word database.

DANGEROUS: This deletes all words, sheets and review history!
Only use when you want to start fresh for testing.

Usage:
    python -m scripts.maintenance.reset_word_db
"""

from vocab.config import configure_logging, load_settings
from vocab.store import WordStore


def main():
    settings = load_settings()
    configure_logging(settings)

    print("=" * 60)
    print("WARNING: Reset Word Database")
    print("=" * 60)
    print()
    print(f"Database: {settings.database_url}")
    print("This will DELETE:")
    print("  - All words and their review history")
    print("  - All sheets")
    print()

    response = input("Are you sure you want to reset? (type 'yes' to confirm): ")

    if response.lower() == "yes":
        print("\nResetting database...")
        WordStore.from_settings(settings).reset_db()
        print("✓ Database reset complete!")
    else:
        print("\nCancelled. No changes made.")


if __name__ == "__main__":
    main()
