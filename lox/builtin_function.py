import sys
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, List

from .environment import Environment
from .types import LoxCallable, to_string

if TYPE_CHECKING:
    from .interpreter import Interpreter


EXIT_CODE = 1


@dataclass(eq=False)
class NativeFunction(LoxCallable):
    name: str
    param_count: int
    fn: Callable[['Interpreter', List[Any]], Any]

    def arity(self) -> int:
        return self.param_count

    def call(self, interpreter: 'Interpreter', arguments: List[Any]) -> Any:
        return self.fn(interpreter, arguments)

    def __repr__(self) -> str:
        return f"<native fn {self.name}>"


def std_clock(interpreter: 'Interpreter', args: List[Any]) -> Any:
    return time.time()


def std_exit(interpreter: 'Interpreter', args: List[Any]) -> Any:
    interpreter.session.debug(1, "exit() called")
    sys.exit(EXIT_CODE)


def std_print(interpreter: 'Interpreter', args: List[Any]) -> Any:
    print(to_string(args[0]), file=interpreter.session.stdout)
    return None


def define_natives(env: Environment):
    """Register the host-provided functions in the global environment."""
    env.define('clock', NativeFunction('clock', 0, std_clock))
    env.define('exit', NativeFunction('exit', 0, std_exit))
    env.define('print', NativeFunction('print', 1, std_print))
