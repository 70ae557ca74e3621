"""
Interactive prompts.
Single responsibility: collect a reconciliation run from terminal answers.
"""

from typing import Callable, List, Optional

from ..adapters.row_loader import DEFAULT_MAX_FILE_SIZE
from ..config.manager import RunConfig, SourceConfig
from ..core.correspondence import resolve_correspondence
from ..errors import InvalidUserInput, SessionCancelled


KEY_HINT = ("Please choose what column you want to use as the key. \n"
            "This should be a constant between both spreadsheets, "
            "something such as an employee ID or the policy number.")


def require_text(answer: str, what: str) -> str:
    """
    Reject blank answers.

    Args:
        answer: Raw answer
        what: Description used in the error message

    Returns:
        Trimmed answer
    """
    answer = answer.strip()
    if not answer:
        raise InvalidUserInput(f"{what} cannot be empty. Please try again.")
    return answer


def parse_yes_no(answer: str) -> bool:
    """
    Accept yes or no in any case.

    Returns:
        True for yes, False for no
    """
    answer = answer.strip().lower()
    if answer == "yes":
        return True
    if answer == "no":
        return False
    raise InvalidUserInput("Please enter yes or no.")


def parse_column_count(answer: str) -> int:
    """
    Accept a positive integer.

    Returns:
        Number of columns to compare
    """
    try:
        count = int(answer.strip())
    except ValueError:
        raise InvalidUserInput("Invalid number. Please enter a valid integer.") from None
    if count <= 0:
        raise InvalidUserInput("Number of columns must be greater than 0. Please try again.")
    return count


class InteractiveSession:
    """
    Ask for two spreadsheets, their key columns and the columns to compare.
    """

    def __init__(self, input_func: Optional[Callable[[str], str]] = None,
                 output_func: Optional[Callable[[str], None]] = None):
        """
        Initialize interactive session.

        Args:
            input_func: Reads one answer given a prompt (input by default)
            output_func: Prints one message (print by default)
        """
        self._input = input_func or input
        self._print = output_func or print

    def _read(self, prompt: str) -> str:
        try:
            return self._input(prompt)
        except (KeyboardInterrupt, EOFError):
            self._print("\nCancelled")
            raise SessionCancelled("Interactive session cancelled") from None

    def ask(self, prompt: str, parse: Callable[[str], object]):
        """Repeat the prompt until the parser accepts the answer."""
        while True:
            try:
                return parse(self._read(prompt))
            except InvalidUserInput as e:
                self._print(str(e))

    def collect(self, max_file_size: int = DEFAULT_MAX_FILE_SIZE,
                output: Optional[str] = None) -> RunConfig:
        """
        Run the full question sequence.

        Args:
            max_file_size: Size guard for both sources
            output: Optional findings export path

        Returns:
            RunConfig built from the answers

        Raises:
            SessionCancelled: Input ended before all answers were given
        """
        path_first = self.ask(
            "Enter the path for the first spreadsheet "
            "(e.g., spreadsheets/spreadsheet1.xlsx): ",
            lambda a: require_text(a, "File path"))
        path_second = self.ask(
            "Enter the path for the second spreadsheet "
            "(e.g., spreadsheets/spreadsheet2.xlsx): ",
            lambda a: require_text(a, "File path"))

        self._print(KEY_HINT)
        key_first = self.ask(
            "Enter the name of the column containing the keys you wish to use "
            "in the first spreadsheet: ",
            lambda a: require_text(a, "Key column"))
        key_second = self.ask(
            "Enter the name of the column containing the keys you wish to use "
            "in the second spreadsheet: ",
            lambda a: require_text(a, "Key column"))

        same_names = self.ask(
            "Are the names of the columns the same on both spreadsheets? (yes/no): ",
            parse_yes_no)
        count = self.ask("Enter the number of columns to compare: ",
                         parse_column_count)

        first_columns: List[str] = []
        second_columns: List[str] = []
        for number in range(1, count + 1):
            if same_names:
                first_columns.append(self.ask(
                    f"Enter the name of column {number} to compare: ",
                    lambda a: require_text(a, "Column name")))
            else:
                first_columns.append(self.ask(
                    f"Enter the name of column {number} you want to compare "
                    f"in the first spreadsheet: ",
                    lambda a: require_text(a, "Column name")))
                second_columns.append(self.ask(
                    f"Enter the name of column {number} you want to compare "
                    f"in the second spreadsheet: ",
                    lambda a: require_text(a, "Column name")))

        correspondence = resolve_correspondence(
            same_names, first_columns, None if same_names else second_columns
        )

        return RunConfig(
            first=SourceConfig(path_first, key_first),
            second=SourceConfig(path_second, key_second),
            correspondence=correspondence,
            same_column_names=same_names,
            max_file_size=max_file_size,
            output=output
        )
