"""Starter books and quotes used when the library has no saved data."""

from datetime import date

from .models import Book, Quote


def seed_books() -> list[Book]:
    """Return a fresh copy of the starter book collection."""
    return [
        Book(
            id=1,
            title="The Great Gatsby",
            author="F. Scott Fitzgerald",
            genre="Classic Literature",
            pages=180,
            date_added=date(2024, 1, 15),
            date_started=date(2024, 1, 20),
            date_finished=date(2024, 2, 5),
            rating=5,
            status="completed",
            reading_progress=100,
            time_spent_minutes=420,
            notes="A masterpiece of American literature. The symbolism and themes are incredibly deep.",
            tags=["classic", "american", "symbolism"],
            excerpt=(
                "In my younger and more vulnerable years my father gave me some advice "
                "that I've carried with me ever since. 'Whenever you feel like criticizing "
                "anyone,' he told me, 'just remember that all the people in this world "
                "haven't had the advantages that you've had.'"
            ),
        ),
        Book(
            id=2,
            title="Pride and Prejudice",
            author="Jane Austen",
            genre="Romance",
            pages=432,
            date_added=date(2024, 2, 10),
            date_started=date(2024, 2, 15),
            rating=4,
            status="reading",
            reading_progress=65,
            time_spent_minutes=280,
            notes="Enjoying the wit and social commentary. Elizabeth Bennet is a fantastic character.",
            tags=["romance", "classic", "british"],
            excerpt=(
                "It is a truth universally acknowledged, that a single man in possession "
                "of a good fortune, must be in want of a wife. However little known the "
                "feelings or views of such a man may be on his first entering a "
                "neighbourhood, this truth is so well fixed in the minds of the "
                "surrounding families."
            ),
        ),
        Book(
            id=3,
            title="The Hobbit",
            author="J.R.R. Tolkien",
            genre="Fantasy",
            pages=310,
            date_added=date(2024, 3, 1),
            status="to-read",
            notes="Looking forward to this adventure!",
            tags=["fantasy", "adventure", "tolkien"],
            excerpt=(
                "In a hole in the ground there lived a hobbit. Not a nasty, dirty, wet "
                "hole, filled with the ends of worms and an oozy smell, nor yet a dry, "
                "bare, sandy hole with nothing in it to sit down on or to eat: it was a "
                "hobbit-hole, and that means comfort."
            ),
        ),
        Book(
            id=4,
            title="Atomic Habits",
            author="James Clear",
            genre="Self-Help",
            pages=320,
            date_added=date(2024, 1, 5),
            date_started=date(2024, 1, 10),
            rating=5,
            status="completed",
            reading_progress=100,
            time_spent_minutes=380,
            notes="Life-changing book about building good habits and breaking bad ones.",
            tags=["self-help", "productivity", "habits"],
            excerpt=(
                "The aggregation of marginal gains is a philosophy that emphasizes the "
                "incredible power of making small improvements consistently. If you can "
                "get 1% better each day for one year, you'll end up thirty-seven times "
                "better by the time you're done."
            ),
        ),
        Book(
            id=5,
            title="Dune",
            author="Frank Herbert",
            genre="Science Fiction",
            pages=688,
            date_added=date(2024, 2, 20),
            date_started=date(2024, 3, 1),
            status="reading",
            reading_progress=25,
            time_spent_minutes=180,
            notes="Complex world-building. Taking notes to keep track of all the factions and terminology.",
            tags=["sci-fi", "epic", "politics"],
            excerpt=(
                "I must not fear. Fear is the mind-killer. Fear is the little-death that "
                "brings total obliteration. I will face my fear. I will permit it to pass "
                "over me and through me. And when it has gone past I will turn the inner "
                "eye to see its path."
            ),
        ),
        Book(
            id=6,
            title="The Psychology of Money",
            author="Morgan Housel",
            genre="Finance",
            pages=256,
            date_added=date(2024, 3, 10),
            status="to-read",
            notes="Recommended by a friend. Excited to learn about behavioral finance.",
            tags=["finance", "psychology", "investing"],
            excerpt=(
                "The premise of this book is that doing well with money has a little to "
                "do with how smart you are and a lot to do with how you behave. And "
                "behavior is hard to teach, even to really smart people."
            ),
        ),
    ]


def seed_quotes() -> list[Quote]:
    """Return a fresh copy of the starter quotes."""
    return [
        Quote(
            id=1,
            text="So we beat on, boats against the current, borne back ceaselessly into the past.",
            author="F. Scott Fitzgerald",
            book="The Great Gatsby",
            book_id=1,
            date_added=date(2024, 2, 5),
            page=180,
            tags=["philosophy", "time", "struggle"],
        ),
        Quote(
            id=2,
            text="I must not fear. Fear is the mind-killer.",
            author="Frank Herbert",
            book="Dune",
            book_id=5,
            date_added=date(2024, 3, 5),
            page=8,
            tags=["courage", "fear", "mental-strength"],
        ),
        Quote(
            id=3,
            text="You do not rise to the level of your goals. You fall to the level of your systems.",
            author="James Clear",
            book="Atomic Habits",
            book_id=4,
            date_added=date(2024, 1, 25),
            page=27,
            tags=["habits", "systems", "goals"],
        ),
    ]
