
from dataclasses import dataclass
from dataclasses import field

from . import error


@dataclass
class binding:
    value   : int
    mutable : bool = False


#all bindings are program-global once declared and live for one run
@dataclass
class environment:
    bindings : dict[str, binding] = field(default_factory=lambda: {})

    def lookup(self, name) -> binding:
        if name not in self.bindings:
            raise error.RuntimeFault(f"Identifier '{name}' not found")
        return self.bindings[name]

    def value(self, name):
        return self.lookup(name).value

    def bind(self, name, value, mutable=False):
        self.bindings[name] = binding(value, mutable)

    def assign(self, name, value):
        target = self.lookup(name)
        if not target.mutable:
            raise error.RuntimeFault(f"Variable '{name}' is immutable, declare it with 'asmut' to modify it")
        target.value = value

