# catalog.py
# Undergraduate majors (B.A. and B.S.) from the campus general catalog fields-of-study chart.
MAJORS: tuple[str, ...] = (
    "Agroecology",
    "Ancient Studies",
    "Anthropology",
    "Applied Linguistics and Multilingualism",
    "Applied Mathematics",
    "Applied Physics",
    "Art",
    "Art and Design: Games and Playable Media",
    "Biochemistry and Molecular Biology",
    "Biology",
    "Biomolecular Engineering and Bioinformatics",
    "Biotechnology",
    "Business Management Economics",
    "Chemistry",
    "Classical Studies",
    "Cognitive Science",
    "Computer Engineering",
    "Computer Science",
    "Computer Science: Computer Game Design",
    "Critical Race and Ethnic Studies",
    "Earth Sciences",
    "Ecology and Evolutionary Biology",
    "Economics",
    "Education, Democracy and Justice",
    "Electrical Engineering",
    "Environmental Studies",
    "Feminist Studies",
    "Film and Digital Media",
    "Global and Community Health",
    "History",
    "History of Art and Visual Culture",
    "Human Biology",
    "Italian Studies",
    "Japanese Studies",
    "Jewish Studies",
    "Language Studies",
    "Latin American and Latino Studies",
    "Legal Studies",
    "Linguistics",
    "Literature",
    "Marine Biology",
    "Mathematics",
    "Molecular, Cell and Developmental Biology",
    "Music",
    "Neuroscience",
    "Philosophy",
    "Physics",
    "Physics (Astrophysics)",
    "Politics",
    "Psychology",
    "Robotics Engineering",
    "Science Education",
    "Sociology",
    "Spanish Studies",
    "Statistics",
    "Technology and Information Management",
    "Theater Arts",
)

YEARS: tuple[str, ...] = ("Freshman", "Sophomore", "Junior", "Senior", "Graduate")

COLLEGES: tuple[str, ...] = (
    "Cowell College",
    "Stevenson College",
    "Crown College",
    "Merrill College",
    "Porter College",
    "Kresge College",
    "Oakes College",
    "Rachel Carson College",
    "College Nine",
    "John R. Lewis College",
)

# Chips offered during onboarding and profile editing.
POPULAR_INTERESTS: tuple[str, ...] = (
    "Art",
    "Baking",
    "Board Games",
    "Camping",
    "Cooking",
    "Dancing",
    "Fitness",
    "Gaming",
    "Gardening",
    "Hiking",
    "Music",
    "Photography",
    "Reading",
    "Running",
    "Sports",
    "Swimming",
    "Technology",
    "Travel",
    "Volunteering",
    "Writing",
    "Yoga",
    "Film",
    "Theater",
    "Drawing",
    "Coding",
    "Rock Climbing",
    "Surfing",
    "Cycling",
    "Meditation",
    "Crafting",
)

# Interest options of the discover sidebar.
FILTER_INTERESTS: tuple[str, ...] = (
    "Art",
    "Board Games",
    "Camping",
    "Cooking",
    "Dancing",
    "Fitness",
    "Gaming",
    "Gardening",
    "Hiking",
    "Linguistics",
    "Movies",
    "Music",
    "Photography",
    "Reading",
    "Sports",
    "Technology",
    "Travel",
    "Writing",
    "Yoga",
)


def is_known_major(value: str) -> bool:
    return value in MAJORS


def is_known_college(value: str) -> bool:
    return value in COLLEGES
