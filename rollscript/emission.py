
from dataclasses import dataclass
from dataclasses import field

from . import error


@dataclass
class program:
    insts : list = field(default_factory=lambda: [])

    # maps subroutine name to the index of its sub instruction
    subs  : dict[str, int] = field(default_factory=lambda: {})

    def __call__(self, inst):
        self.insts.append(inst)

    def __len__(self):
        return len(self.insts)

    def __getitem__(self, index):
        return self.insts[index]

    def address(self):
        return len(self.insts)

    def define_routine(self, name):
        self.subs[name] = self.address()

    def check_routine_defined(self, name):
        return name in self.subs

    def lookup_routine(self, name):
        if name not in self.subs:
            raise error.RuntimeFault(f"Internal error: subroutine '{name}' was never registered")
        return self.subs[name]

    def render(self):
        return "\n".join(f"{index:04} : {inst}" for index, inst in enumerate(self.insts))
