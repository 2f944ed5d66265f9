# prompt.py

from es_migration.errors import ConfirmationError

YES_RESPONSES = ("y", "yes")
NO_RESPONSES = ("n", "no")


def ask_for_confirmation(message, read=input, max_attempts=None):
    """
    Ask a yes/no question until the operator gives a recognizable answer.

    "y", "Y", "yes", "YES", "Yes" ... count as yes and the same casings of
    "n"/"no" count as no. Anything else asks again, forever unless
    max_attempts is set.

    :param message: Prompt shown to the operator.
    :param read: Callable taking the prompt and returning one line of input.
    :param max_attempts: Give up with ConfirmationError after this many answers.
    :return: True for yes, False for no.
    """
    attempts = 0
    while max_attempts is None or attempts < max_attempts:
        attempts += 1
        try:
            response = read(message)
        except (EOFError, OSError) as e:
            raise ConfirmationError(f"Cannot read from stdin: {e}") from e

        response = response.strip().lower()
        if response in YES_RESPONSES:
            return True
        if response in NO_RESPONSES:
            return False

    raise ConfirmationError(f"No yes/no answer after {max_attempts} attempts")
