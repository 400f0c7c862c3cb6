from typing import Dict, Union

from sip.errors import UndefinedVariable

Number = Union[int, float]


class Environment:
    """Runtime memory of one program run: variable name -> current value.

    An environment is created by `Interpreter.interpret` and passed down
    the walk explicitly; it lives exactly as long as that call.
    """
    def __init__(self):
        self.values: Dict[str, Number] = {}

    def get(self, name: str) -> Number:
        if name in self.values:
            return self.values[name]
        raise UndefinedVariable(name)

    def set(self, name: str, value: Number):
        self.values[name] = value

    def snapshot(self) -> Dict[str, Number]:
        return dict(self.values)
