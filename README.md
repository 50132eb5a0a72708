# zyn

`zyn` manages small C and C++ projects from the command line. It creates a
project skeleton, fetches and builds git dependencies with CMake, records them
in lock files, compiles your sources with the flags of a chosen profile,
skips recompiling when nothing has changed, and writes editor configuration.

## Installation

```
pip install .
```

This installs the `zyn` command (`zyn.cli:main`). Git, CMake and a C or C++
compiler must be on your `PATH` for the commands that fetch, build and run
code.

## Commands

All commands except `new` are run from the project folder, which holds
`zyn.toml`. Working files live under `.zyn/`. A failing command prints
`[Zyn] Error: ...` and exits with status 1.

| Command | What it does |
| --- | --- |
| `zyn new <folder>` | Asks for name, language, standard and compiler, then writes `zyn.toml`, `src/`, `include/` and a hello-world `src/main.c` (language `c`) or `src/main.cpp` (language `cpp`). |
| `zyn install` | Clones, checks against its lock file and builds every git dependency in `zyn.toml`, several at once. Path dependencies are skipped. |
| `zyn install <url>[@tag]` | Adds a git dependency to `zyn.toml` and installs it, then prints the include folders found under `.zyn/deps` and `.zyn/build`. |
| `zyn add <path>` | Adds a local library folder as a path dependency, named after the folder. |
| `zyn run [profile]` | Runs `zyn install`, compiles if anything changed, then runs `.zyn/build/<name>`. The profile defaults to `--test`; new projects define `--release` and `--debug`. |
| `zyn update` | Moves git dependencies to their current commit and rebuilds those whose lock no longer matches. |
| `zyn clean` | Removes the `.zyn/` folder. |
| `zyn ide --vscode` / `--clion` / `--qtcreator` | Writes `.vscode/*.json`, `.clion/CMakeLists.txt` or `.qtcreator/ZynProject.pro`. |

### Installing from a URL

The dependency's name is the repository part of a `github.com/<owner>/<repo>`
URL, with any `.git` ending removed; other URLs get the name `library`. If the
name is already in `zyn.toml`, nothing is done. Without `@tag`, the newest tag
of the repository is looked up and recorded. With `@tag`, a tag of the same
name prefixed by `v` is used when the repository has one.

## zyn.toml

```toml
[project]
version = "1.0.0"
name = "hello"
language = "cpp"
standard = "c++17"
compiler = "g++"

[settings.profiles.--release]
flags = ["-O3 -DNDEBUG"]

[directories]
sources = "src"
include = "include"

[dependencies]
fmt = { git = "https://git.example.com/acme/fmt.git", tag = "10.2.1" }
mylib = { path = "../mylib" }

[libraries]
lib_dirs = []
libraries = ["m"]
```

`language` is also the file extension of the sources: every `*.<language>`
file under `sources` is compiled. Missing keys fall back to defaults
(`name = "default_name"`, `compiler = "g++"`, `sources = "src"`,
`include = "include"`).

The compile command is
`<compiler> -std=<standard> <sources> -o .zyn/build/<name> -I<include>`,
followed by `-I` for every folder named `include` or `Include` inside path
dependencies, `.zyn/deps` and `.zyn/build`, then `-L` for each of `lib_dirs`,
`-l` for each of `libraries`, and the flags of the chosen profile.

## Cached builds

After a successful compile, a SHA-256 over the project's sources and `.h`
headers is stored in `.zyn/cache/source_hashes.txt`. `zyn run` compiles
again only when the executable is missing, the hash has changed, or a `.h`,
`.cpp` or `CMakeLists.txt` file in a path dependency is newer than the
executable.

## Lock files

Each installed git dependency gets `.zyn/lock/<name>.lock` holding the
checked-out commit (`rev=`) and a SHA-256 of its `.cpp`, `.h` and
`CMakeLists.txt` files (`sha256=`). `zyn install` stops the process if a
dependency no longer matches its lock; run `zyn update` to refresh it.

## Limitations

- The CLion and Qt Creator files always name `src/main.cpp` and C++17,
  whatever the project settings are.
- `zyn run` runs `./.zyn/build/<name>` without any `.exe` suffix, so on
  Windows the compiled program is not started.
- There is no command to remove a dependency; edit `zyn.toml` by hand.

## Running the tests

```
pip install .[test]
pytest
```