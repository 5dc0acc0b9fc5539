# clikit

Small, dependency-free building blocks for command-line tools.

- `clikit.values`: typed flag values that parse text (`IntValue`, `UintValue`,
  `FloatValue`, `StringValue`, `GenericValue`, `TimestampValue`). Integers and
  floats are range-checked against a bit width (8, 16, 32 or 64 for integers,
  32 or 64 for floats); `IntegerConfig(base=...)` picks the number base, with
  base 0 accepting `0x`, `0o` and `0b` prefixes. `TimestampConfig` holds a
  default timezone and a list of `strptime` layouts; the first layout that
  matches wins, and a layout without a year takes the current year (without a
  date at all, the current date).
- `clikit.slices`: `SliceValue`, a list of typed elements set from
  comma-separated text. The first `set` replaces the defaults, later ones
  append. `serialize()` writes the list as prefixed JSON that `set` reads back.
- `clikit.maps`: `MapValue`, a mapping of string keys to typed values set from
  `key=value` items, with the same replace-then-add and serialization rules.
- `clikit.flags`: flag definitions (`IntFlag`, `UintFlag`, `FloatFlag`,
  `StringFlag`, `GenericFlag`, `TimestampFlag`, `IntSliceFlag`,
  `UintSliceFlag`, `FloatSliceFlag`, `StringSliceFlag`, `StringMapFlag`) with
  names and aliases, defaults, validators, actions and an `only_once` rule.
  `post_parse()` fills a flag that was not set from its `env_vars`, or from a
  lookup function you pass in.
- `clikit.mutex`: `MutuallyExclusiveFlags`, groups of option paths of which at
  most one may be used; `check()` raises `MutuallyExclusiveGroupError` or
  `MutuallyExclusiveRequiredError`.
- `clikit.helptext`: help text layout helpers (`wrap`, `wrap_line`, `indent`,
  `nindent`, `offset`, `offset_commands`, `subtract`), `cli_arg_contains`, and
  shell completion output (`print_flag_suggestions`,
  `print_command_suggestions`, with zsh-style `name:usage` lines).
- `clikit.suggestions`: `jaro_distance`, `jaro_winkler`, `suggest_flag`,
  `suggest_command` and `did_you_mean`.
- `clikit.sorting`: `lexicographic_less`, a case-aware alphabetical order.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Examples

### Parsing flag values

```python
from clikit.flags import IntSliceFlag, UintFlag

port = UintFlag(name="port", aliases=["p"], value=8080)
port.set("9090")
assert port.get() == 9090

numbers = IntSliceFlag(name="numbers")
numbers.set("1,2")
numbers.set("3,4")
assert numbers.get() == [1, 2, 3, 4]
```

Text that does not parse, or a value out of range for the flag's bit width,
raises `ValueError`.

### Mutually exclusive flags

```python
from clikit.flags import IntFlag, StringFlag
from clikit.mutex import MutuallyExclusiveFlags, MutuallyExclusiveGroupError

first = IntFlag(name="i")
second = StringFlag(name="s")
group = MutuallyExclusiveFlags(flags=[[first], [second]])

first.set("10")
second.set("x")
try:
    group.check()
except MutuallyExclusiveGroupError as err:
    print(err)  # option i cannot be set along with option s
```

### Suggestions

```python
from clikit.suggestions import did_you_mean, jaro_winkler, suggest_command

print(jaro_winkler("aa", "ab"))   # 0.6666666666666666
print(did_you_mean("--help"))     # Did you mean "--help"?
print(suggest_command([["config"], ["info"]], "conf"))  # config
```

### Help text layout

```python
from clikit.helptext import nindent, wrap

print(wrap("a rather long line of usage text", 3, 20))
print(nindent(3, "foo\nbar"))
```

### Ordering names

```python
from clikit.sorting import lexicographic_less

assert lexicographic_less("A", "a")
assert lexicographic_less("a", "b")
```

## What it does not do

clikit has no command type, no argument parser that walks a command line, and
no help template renderer. It provides the pieces such a tool is built from:
you decide which flag receives which text and call `set`, `post_parse` and
`MutuallyExclusiveFlags.check` yourself, and you lay out help output with the
helpers in `clikit.helptext`. It installs no command of its own.