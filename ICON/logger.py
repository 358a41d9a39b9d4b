class Logger:
    """Console logger handed to the generators. Lines look like '[tag] message'."""

    def __init__(self, tag: str = "icopack", quiet: bool = False):
        self.tag = tag
        self.quiet = quiet

    def log(self, msg: str):
        if not self.quiet:
            print(f"[{self.tag}] {msg}")

    def child(self, tag: str) -> "Logger":
        return Logger(tag=tag, quiet=self.quiet)
