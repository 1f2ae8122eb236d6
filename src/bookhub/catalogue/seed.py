"""Default catalogue written to storage the first time the storefront starts."""

DEFAULT_CATALOG = [
    {
        "id": "1",
        "title": "Pride and Prejudice",
        "author": "Jane Austen",
        "category": "Romance",
        "price": 299.0,
        "rating": 4.8,
        "bestseller": True,
        "coverImage": "https://images.bookhub.example/covers/pride-and-prejudice.jpg",
        "description": "Elizabeth Bennet and Mr. Darcy misjudge each other across the drawing rooms of Regency England.",
        "createdAt": "2024-01-05T10:00:00.000Z",
    },
    {
        "id": "2",
        "title": "The Hound of the Baskervilles",
        "author": "Arthur Conan Doyle",
        "category": "Mystery",
        "price": 249.0,
        "rating": 4.6,
        "bestseller": True,
        "coverImage": "https://images.bookhub.example/covers/hound-of-the-baskervilles.jpg",
        "description": "Sherlock Holmes investigates a family curse on the moors of Devon.",
        "createdAt": "2024-01-06T10:00:00.000Z",
    },
    {
        "id": "3",
        "title": "The Time Machine",
        "author": "H. G. Wells",
        "category": "Science Fiction",
        "price": 199.0,
        "rating": 4.3,
        "bestseller": False,
        "coverImage": "https://images.bookhub.example/covers/the-time-machine.jpg",
        "description": "A Victorian inventor travels to the distant future of humanity.",
        "createdAt": "2024-01-07T10:00:00.000Z",
    },
    {
        "id": "4",
        "title": "On the Origin of Species",
        "author": "Charles Darwin",
        "category": "Science",
        "price": 449.0,
        "rating": 4.5,
        "bestseller": False,
        "coverImage": "https://images.bookhub.example/covers/origin-of-species.jpg",
        "description": "The foundational argument for evolution by natural selection.",
        "createdAt": "2024-01-08T10:00:00.000Z",
    },
    {
        "id": "5",
        "title": "Meditations",
        "author": "Marcus Aurelius",
        "category": "Non-Fiction",
        "price": 179.0,
        "rating": 4.7,
        "bestseller": True,
        "coverImage": "https://images.bookhub.example/covers/meditations.jpg",
        "description": "Private notes on Stoic philosophy by a Roman emperor.",
        "createdAt": "2024-01-09T10:00:00.000Z",
    },
    {
        "id": "6",
        "title": "Great Expectations",
        "author": "Charles Dickens",
        "category": "Fiction",
        "price": 349.0,
        "rating": 4.4,
        "bestseller": False,
        "coverImage": "https://images.bookhub.example/covers/great-expectations.jpg",
        "description": "The orphan Pip rises, falls and learns what his fortune is worth.",
        "createdAt": "2024-01-10T10:00:00.000Z",
    },
    {
        "id": "7",
        "title": "The Princess and the Goblin",
        "author": "George MacDonald",
        "category": "Fantasy",
        "price": 229.0,
        "rating": 4.1,
        "bestseller": False,
        "coverImage": "https://images.bookhub.example/covers/princess-and-the-goblin.jpg",
        "description": "A princess and a miner's son face the goblins beneath the mountain.",
        "createdAt": "2024-01-11T10:00:00.000Z",
    },
    {
        "id": "8",
        "title": "Frankenstein",
        "author": "Mary Shelley",
        "category": "Science Fiction",
        "price": 279.0,
        "rating": 4.5,
        "bestseller": True,
        "coverImage": "https://images.bookhub.example/covers/frankenstein.jpg",
        "description": "Victor Frankenstein's creation turns on the man who made it.",
        "createdAt": "2024-01-12T10:00:00.000Z",
    },
]
