"""
Terminal prompt helpers used by the command line interface.
"""
from src.utils.message import Log

YES = ("y", "yes")
NO = ("n", "no")


def prompt_yes_no(prompt_text: str) -> bool:
    """
    Ask a yes/no question until it is answered.

    End of input (e.g. a closed pipe) counts as no.
    """
    while True:
        try:
            response = input(f"{prompt_text} [y/n]: ").strip().lower()
        except EOFError:
            Log.debug("No answer on stdin, treating as 'no'")
            return False
        if response in YES:
            return True
        if response in NO:
            return False
        Log.error("Invalid selection. Please enter 'y' for yes or 'n' for no.")
