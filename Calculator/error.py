# error.py
"""""
Exception taxonomy shared by every stage of the calculator pipeline.

Each stage raises one of the MathError subclasses below; the first error
aborts the remaining stages. Callers (command mode, UI) render them with
handler().
"""""


class MathError(Exception):
    kind = "Error"

    def __init__(self, message, code="9999", equation=None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.equation = equation


class HelpRequested(MathError):
    """Not a failure: the user typed 'help' and wants the usage text."""
    kind = "Help"

    def __init__(self, message, code="1000", equation=None):
        super().__init__(message, code=code, equation=equation)


class SyntaxError(MathError):
    kind = "Syntax Error"


class ParserError(MathError):
    kind = "Parser Error"


class LexerError(MathError):
    kind = "Lexer Error"


class ConfigurationError(MathError):
    kind = "Configuration Error"


Error_Dictionary = {

    "1" : "Help",
    "3" : "Calculator Error",
    "5" : "Configuration Error",
    "9" : "Unexpected Error"

}

#Error Messages are structured in:
# 1. Digit: Main Error
# 2. Digit: Stage (1 Syntax, 2 Parser, 3 Lexer)
# 3. and 4. Digit: Error Number


ERROR_MESSAGES = {
    "1000" : "Help requested.",

    "3100" : "Mismatched parentheses!",
    "3101" : "Comma without matching function call!",
    "3102" : "Unexpected character: ", # + character
    "3103" : "Function expected parentheses: ", # + function name
    "3104" : "Empty argument!",

    "3200" : "Too many operators, Too little operands",
    "3201" : "Too few arguments for function: ", # + function name

    "3300" : "Unknown function or constant: ", # + name
    "3301" : "Malformed number: ", # + literal
    "3302" : "No previous answer available!",

    "5000" : "Invalid number of decimal places: ", # + value
    "5001" : "Base too large! Accepted ranges: 2 - 36",
    "5002" : "Invalid configuration value: ", # + key

    "9999" : "Unexpected Error: " #+error
}


def handler(error):
    """Render an error the way the command line and the UI show it."""
    if isinstance(error, HelpRequested):
        return error.message
    if isinstance(error, MathError):
        return f"{error.kind}: {error.message}"
    return ERROR_MESSAGES["9999"] + str(error)
