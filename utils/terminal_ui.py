# --------- ANSI COLORS ----------
class Color:
    RESET = "\033[0m"
    STRIKE = "\033[9m"

    RED = "\033[31m"
    GREEN = "\033[32m"


def paint(text, *colors):
    if not text or not colors:
        return text
    return "".join(colors) + text + Color.RESET
