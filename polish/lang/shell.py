"""Handles interactive/command-line mode for the polish interpreter. Uses cmd as backend."""

import cmd


class Shell(cmd.Cmd):
    """Polish notation interpreter shell."""
    intro = "Polish notation interpreter :: Python backend\nType '?' or 'help' for more information."
    prompt = "> "
    secondary_prompt = ". "  # used for line continutations
    _tmp_prompt = "> "       # also used for prompt swapping in line continuations

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess
        self.results = []  # RunResult of every input run so far

        self._tmp_line = ""

    def default(self, line):
        """Executes arbitrary polish expression."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            source = self._tmp_line + line
            blank, add_to_prev = self.sess.preprocess_line(source)

            if add_to_prev:
                self._tmp_line = source + "\n"
                self.prompt = self.secondary_prompt
                return

            self._tmp_line = ""
            self.prompt = self._tmp_prompt

            if not blank:
                self.results.append(self.sess.run(source))

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        print("Welcome to the polish interpreter!\n\n"
              "Programs are single arithmetic expressions written in prefix (Polish) notation:\n"
              "the operator comes first, followed by two or more operands, all in parentheses.\n"
              "Operands fold from the left, so '(- 10 1 2)' is (10 - 1) - 2 = 7.\n\n"
              "Try it out by typing '(+ 1 (* 2 3))'. Numbers may carry a sign ('-5', '+(+ 2 3)'),\n"
              "and '//' or '/* */' start comments. An expression may span several lines.")

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        if self._tmp_line:
            self.default("")  # keeps line numbers of a continued expression in step
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        print()
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        return True
