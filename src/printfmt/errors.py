## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘


class FormatError(Exception):
    def __init__(self, message: str = "", *, fmt_token=None, fmt_template=None):
        """Base class for all errors raised while preparing a format template."""
        super().__init__(message)
        self.fmt_token: str = fmt_token
        self.fmt_template: str = fmt_template

class FormatNameError(FormatError, NameError):
    """A named placeholder references a name that is absent from the format map."""
    pass
