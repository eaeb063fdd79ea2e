
import sys

try:
    import termios
    import tty
    PLATFORM = "unix"
except ImportError:
    try:
        import msvcrt
        PLATFORM = "windows"
    except ImportError:
        PLATFORM = "unsupported"


ctrl_c = '\x03'
proceed_hint = "[Proceed with any key]"


#display and keyboard used by the interpreter
class terminal:
    def __init__(self, stdin=None, stdout=None):
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout

    def write(self, text):
        self.stdout.write(text + "\n")
        self.stdout.flush()

    def interactive(self):
        return self.stdin.isatty() and PLATFORM != "unsupported"

    def wait_key(self):
        #nothing to wait for when input is piped
        if not self.interactive():
            return

        self.stdout.write(proceed_hint + "\r")
        self.stdout.flush()
        try:
            char = self._read_key()
        finally:
            #wipe the hint
            self.stdout.write(" " * len(proceed_hint) + "\r")
            self.stdout.flush()

        if char == ctrl_c:
            raise KeyboardInterrupt

    def _read_key(self):
        if PLATFORM == "windows":
            return msvcrt.getwch()

        fd = self.stdin.fileno()
        old_settings = termios.tcgetattr(fd)
        try:
            tty.setraw(fd)
            return self.stdin.read(1)
        finally:
            termios.tcsetattr(fd, termios.TCSADRAIN, old_settings)

    #None once the input is exhausted
    def read_line(self, prompt=None):
        if prompt is not None:
            self.stdout.write(prompt)
            self.stdout.flush()

        line = self.stdin.readline()
        if not line:
            return None
        return line.rstrip("\r\n")
