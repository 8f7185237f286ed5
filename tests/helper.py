"""Seed data shared by the API tests."""

INITIAL_BLOGS = [
    {
        "title": "Ensimmäinen testiblogi",
        "author": "Ekan kirjoittaja",
        "url": "www.eka.fi",
        "likes": 40,
    },
    {
        "title": "Toinen testiblogi",
        "author": "Toisen kirjoittaja",
        "url": "www.toinen.com",
        "likes": 16,
    },
]
