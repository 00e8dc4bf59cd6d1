from rich.pretty import pprint

from ecp import *

release = Flag("release").description("Build artifacts in release mode, with optimizations").short("r")
locked = Flag("locked").description("Assert that `Cargo.lock` will remain unchanged")

app = (
    Application("rust")
    .description("Rust programming language")
    .version("0.1.0")
    .command(
        Command("cargo")
        .description("Rust's package manager")
        .subcommand(Command("build").description("Compile the current package").flag(release).flag(locked))
        .subcommand(Command("run").description("Run a binary or example of the local package").flag(release).flag(locked))
    )
)


if __name__ == '__main__':
    pprint(app.run())
