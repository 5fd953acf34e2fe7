HELP_MSG = "Clean every spy attached during a test, including by its fixtures, once the test has finished."
