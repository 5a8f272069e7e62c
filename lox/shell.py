"""Handles interactive mode for the Lox interpreter. Uses cmd as backend."""

import cmd

from .session import Session


class Shell(cmd.Cmd):
    """Lox interactive prompt. Every line is run as one unit of source."""
    intro = "Lox interpreter :: Python backend\nType 'exit' or press Ctrl-D to leave."
    prompt = "> "
    exit_command = "exit"

    def __init__(self, sess: Session, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.sess = sess

    def onecmd(self, line):
        """Routes every line to the interpreter except the exit command and EOF."""
        if line == 'EOF':
            print()
            return True
        if line.strip() == self.exit_command:
            return True
        if not line.strip():
            return self.emptyline()
        self.default(line)
        return False

    def default(self, line):
        """Executes one line of Lox source."""
        self.sess.run_source(line)
        # a bad line must not stop the next one from running
        self.sess.errors.reset()

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return False
