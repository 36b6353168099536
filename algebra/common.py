class AlgebraError(Exception):
    pass

class InvalidArgument(AlgebraError, ValueError):
    pass

class IllegalState(AlgebraError, RuntimeError):
    pass

class UndefinedArithmetic(AlgebraError, ArithmeticError):
    pass

def require(condition, message):
    if not condition:
        raise InvalidArgument(message)
