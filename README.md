# yambs

Building blocks for a build system for C and C++ projects. The package reads a
TOML project manifest (`yambs.toml`), expands variables in it, resolves source
files and dependencies against the manifest directory, reads a toolchain
description (`toolchain.toml`), and tracks the progress of a running build by
watching which object files have appeared.

## What is in it

- `yambs.types`: the manifest vocabulary: `Language`, `CStandard`,
  `CXXStandard`, `LibraryType`, `IncludeSearchType`, `Define`, the dependency
  kinds (`SourceData`, `HeaderOnlyData`, `PkgConfigData`) and the raw manifest
  records (`ProjectConfig`, `RawCommonData`, `RawLibraryData`,
  `RawManifestData`). `parse_standard` recognises any C or C++ standard,
  trying C++ first; `standard_for_language` parses a standard for a given
  language; `verify_standard_language` checks that a standard fits a language.
- `yambs.preprocessor`: `Preprocessor` replaces `${NAME}` with preset
  `Variable`s and `${env:NAME}` with environment variables before the manifest
  is parsed.
- `yambs.parser`: `parse` reads a manifest file and `parse_toml` turns
  manifest text into `ManifestData`. Failures raise `ParseTomlError`.
- `yambs.manifest`: `Manifest`, `ManifestData` and `ParsedManifest`; the
  manifest file name is `YAMBS_MANIFEST_NAME` (`yambs.toml`).
- `yambs.targets`: `Executable`, `Library` and `Dependency`, with every path
  made absolute by `canonicalize_source`.
- `yambs.toolchain`: `Toolchain.from_file` reads `toolchain.toml`;
  `Archiver.find` looks for an archiver.
- `yambs.progress`: `Progress` counts the object files already built for a
  target.
- `yambs.output`: `Output` for coloured status, warning and error messages,
  `ProgressBar`, and `filter_string` for trimming archiver noise out of build
  output.
- `yambs.utility` and `yambs.shell`: file-system helpers and running external
  programs (`execute`, `execute_get_stdout`).

## A manifest

```toml
[project_config]
std = "c++17"
language = "C++"

[executable.app]
sources = ["${YAMBS_MANIFEST_DIR}/src/main.cpp"]
cxxflags_append = ["-g", "-O2"]

[[executable.app.defines]]
macro = "VERBOSE"
value = "1"

[library.core]
sources = ["src/core.cpp"]
type = "shared"

[library.core.dependencies]
fmt = { path = "third-party/fmt" }
```

Source paths are resolved relative to the directory holding the manifest and
must exist. A library's `type` is `static` (the default) or `shared`. A
dependency is one of:

- `{ path = "...", origin = "Include" }` (origin may also be `"System"`),
- `{ include_directory = "..." }` for header-only code,
- `{ pkg_config_search_dir = "..." }`.

Keys of a target other than `sources`, `dependencies` and `defines` are kept
as its `compiler_flags`. Unknown top-level keys and unknown keys in
`project_config` are rejected. Executables come before libraries in
`ManifestData.targets`, each group sorted by name. If both `std` and
`language` are set, they must agree.

## Reading a manifest

```python
from pathlib import Path

from yambs.parser import parse

parsed = parse(
    Path("project/yambs.toml"),
    build_directory=Path("build"),
    manifest_directory=Path("project"),
    build_type="debug",
)
for target in parsed.data.targets:
    if target.executable():
        print("executable", target.name, target.sources)
    if target.library():
        print("library", target.name)
```

`parse` offers the preset variables `YAMBS_BUILD_DIR`, `YAMBS_MANIFEST_DIR`
and `YAMBS_BUILD_TYPE` to the manifest. Text that is already in memory goes
through `parse_toml`:

```python
from pathlib import Path

from yambs.parser import parse_toml

data = parse_toml('[executable.x]\nsources = ["main.cpp"]\n', Path("project"))
```

## Variables

```python
from yambs.preprocessor import Preprocessor, Variable

preprocessor = Preprocessor().with_var(Variable(key="YAMBS_MANIFEST_DIR", value="/work/app"))
text = preprocessor.parse('sources = ["${YAMBS_MANIFEST_DIR}/src/main.cpp"]')
```

`Preprocessor.parse` looks for the first `${env:...}` reference and the first
`${...}` reference, and replaces every occurrence of each matched text. An
unknown `${NAME}` raises `PreprocessorError`; an unset `${env:NAME}` does too.

## Standards and defines

```python
from yambs.types import Define, Language, parse_standard, verify_standard_language

standard = parse_standard("c++20")
verify_standard_language(standard, Language.parse("C++"))
define = Define.from_cli("LOG_LEVEL=2")
```

Standard names are matched without regard to case. A standard that does not
belong to the language raises `ParseStandardError`; a define without `=`
raises `ParseDefineError`.

## Toolchains

```toml
[CXX]
compiler = "/usr/bin/g++"

[CC]
compiler = "/usr/bin/gcc"

[common]
archiver = "/usr/bin/ar"
pkg-config = "/usr/bin/pkg-config"
```

```python
from pathlib import Path

from yambs.toolchain import Toolchain

toolchain = Toolchain.from_file(Path(".yambs/toolchain.toml"))
archiver = toolchain.archiver()
```

The file must exist, be named `toolchain.toml`, and hold the `CXX`, `CC` and
`common` tables. Problems with it are reported as `ToolchainError`, whose
`kind` tells which check failed. `toolchain.archiver()` uses the archiver from
the file, or else `$AR`, or else `ar` found on `PATH`.

## Build progress

```python
from pathlib import Path

from yambs.progress import Progress

progress = Progress.from_directory(Path("build"), None)
progress.update()
print(f"{progress.current}/{progress.total}")
```

`Progress` reads `progress.json` from the build directory and follows the
`all` target unless another one is named.

## What it does not do

There is no command to run: the package is a library. It does not check or
run compilers, does not write makefiles and does not start `make`; it reads
manifests and toolchain files, and watches the object files a build produces.