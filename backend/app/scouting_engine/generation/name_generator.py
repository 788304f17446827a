FIRST_NAMES = [
    "Marcus", "Devin", "Jalen", "Tyrese", "Darius", "Andre", "Malik", "Isaiah",
    "Cam", "Trey", "Jordan", "Kevin", "Brandon", "Chris", "Mike", "Dave",
    "Rick", "Gary", "Paul", "Scott",
]

LAST_NAMES = [
    "Smith", "Johnson", "Williams", "Brown", "Davis", "Miller", "Wilson", "Moore",
    "Taylor", "Anderson", "Thomas", "Jackson", "White", "Harris", "Cole", "Hill",
]

# Overseas prospects and their scouts' counterparts
INTERNATIONAL_FIRST_NAMES = [
    "Luka", "Nikola", "Giannis", "Dario", "Bogdan", "Mateo", "Alperen", "Rudy",
    "Domas", "Franz",
]

INTERNATIONAL_LAST_NAMES = [
    "Petrov", "Jokanovic", "Sabonis", "Dubois", "Garcia", "Sengun", "Kuznetsov",
    "Hezonja", "Wagner", "Pettersson",
]

def generate_name(rng, international=False):
    if international:
        return f"{rng.choice(INTERNATIONAL_FIRST_NAMES)} {rng.choice(INTERNATIONAL_LAST_NAMES)}"
    return f"{rng.choice(FIRST_NAMES)} {rng.choice(LAST_NAMES)}"
