from __future__ import annotations

from typing import Any


# Initial gallery, inserted only when `gallery_items` is empty.
SEED_ITEMS: list[dict[str, Any]] = [
    # May 2025
    {
        "id": "img-001",
        "type": "image",
        "src": "/source/Pics/identity_veeshna_01.jpg",
        "alt": "identity_veeshna_01.jpg",
        "categories": ["library", "nature", "landscape"],
        "isFavorite": False,
        "dateGroup": "May 1, 2025",
    },
    {
        "id": "vid-001",
        "type": "video",
        "src": "https://www.w3schools.com/html/mov_bbb.mp4",
        "poster": "https://source.unsplash.com/random/800x600?forest,animals",
        "alt": "Big Buck Bunny short clip",
        "categories": ["library", "videos", "animals"],
        "isFavorite": False,
        "dateGroup": "May 1, 2025",
    },
    {
        "id": "img-002",
        "type": "image",
        "src": "/source/Pics/identity_veeshna_03.jpg",
        "alt": "identity_veeshna_03.jpg",
        "categories": ["library", "people", "portraits"],
        "isFavorite": True,
        "dateGroup": "May 1, 2025",
    },
    {
        "id": "img-003",
        "type": "image",
        "src": "/source/Pics/identity_veeshna_02.jpg",
        "alt": "identity_veeshna_02.jpg",
        "categories": ["library", "city"],
        "isFavorite": False,
        "dateGroup": "May 1, 2025",
    },
    {
        "id": "img-004",
        "type": "image",
        "src": "/source/Pics/identity_renuka_02.jpg",
        "alt": "identity_renuka_02.jpg",
        "categories": ["library", "food"],
        "isFavorite": False,
        "dateGroup": "May 1, 2025",
    },
    # April 2025
    {
        "id": "img-005",
        "type": "image",
        "src": "/source/Pics/identity_renuka_01.jpg",
        "alt": "identity_renuka_01.jpg",
        "categories": ["library", "nature", "landscape", "trips"],
        "isFavorite": False,
        "dateGroup": "April 15, 2025",
    },
    {
        "id": "img-006",
        "type": "image",
        "src": "https://source.unsplash.com/random/600x800?architecture,building",
        "alt": "Modern glass skyscraper exterior",
        "categories": ["library", "architecture", "city"],
        "isFavorite": False,
        "dateGroup": "April 15, 2025",
    },
    {
        "id": "vid-002",
        "type": "video",
        "src": "http://commondatastorage.googleapis.com/gtv-videos-bucket/sample/ElephantsDream.mp4",
        "poster": "https://source.unsplash.com/random/800x600?dream,fantasy",
        "alt": "Animated sequence from Elephants Dream",
        "categories": ["library", "videos", "animation"],
        "isFavorite": True,
        "dateGroup": "April 15, 2025",
    },
    {
        "id": "img-007",
        "type": "image",
        "src": "https://source.unsplash.com/random/800x800?animals,cat",
        "alt": "Cute fluffy cat relaxing",
        "categories": ["library", "animals", "favorites"],
        "isFavorite": False,
        "dateGroup": "April 15, 2025",
    },
    {
        "id": "img-008",
        "type": "image",
        "src": "https://source.unsplash.com/random/1200x800?flower,garden",
        "alt": "Vibrant blooming flower in a garden",
        "categories": ["library", "nature", "garden"],
        "isFavorite": False,
        "dateGroup": "April 15, 2025",
    },
    # March 2025
    {
        "id": "img-009",
        "type": "image",
        "src": "https://source.unsplash.com/random/800x600?beach,ocean",
        "alt": "Tropical beach with clear blue ocean",
        "categories": ["library", "nature", "trips"],
        "isFavorite": False,
        "dateGroup": "March 5, 2025",
    },
    {
        "id": "img-010",
        "type": "image",
        "src": "https://source.unsplash.com/random/600x800?coffee,drink",
        "alt": "Steaming cup of coffee on a table",
        "categories": ["library", "everyday"],
        "isFavorite": False,
        "dateGroup": "March 5, 2025",
    },
    {
        "id": "vid-003",
        "type": "video",
        "src": "https://www.w3schools.com/html/movie.mp4",
        "poster": "https://source.unsplash.com/random/800x600?movie,cinema",
        "alt": "Generic movie trailer",
        "categories": ["library", "videos"],
        "isFavorite": False,
        "dateGroup": "March 5, 2025",
    },
    {
        "id": "img-011",
        "type": "image",
        "src": "https://source.unsplash.com/random/800x800?wildlife,bird",
        "alt": "Colorful bird perched on a branch",
        "categories": ["library", "animals"],
        "isFavorite": False,
        "dateGroup": "March 5, 2025",
    },
    # January 2025
    {
        "id": "img-012",
        "type": "image",
        "src": "/source/Pics/identity_veeshna_04.jpg",
        "alt": "Cozy cabin in a snowy landscape",
        "categories": ["library", "nature", "trips"],
        "isFavorite": False,
        "dateGroup": "January 20, 2025",
    },
    {
        "id": "img-013",
        "type": "image",
        "src": "https://source.unsplash.com/random/600x800?fireworks,celebration",
        "alt": "Fireworks exploding in night sky",
        "categories": ["library", "celebration", "events"],
        "isFavorite": True,
        "dateGroup": "January 20, 2025",
    },
    {
        "id": "vid-004",
        "type": "video",
        "src": "http://commondatastorage.googleapis.com/gtv-videos-bucket/sample/ForBiggerBlazes.mp4",
        "poster": "https://source.unsplash.com/random/800x600?fire,winter",
        "alt": "Campfire on a winter evening",
        "categories": ["library", "videos", "trips"],
        "isFavorite": False,
        "dateGroup": "January 20, 2025",
    },
]
