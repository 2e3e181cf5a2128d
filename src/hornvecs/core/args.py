"""Training and quantization options.

:class:`TrainingArgs` is the configuration loader shared by the
training commands (``supervised``, ``skipgram``, ``cbow``) and
``quantize``.  Options use the single-dash camelCase spelling of the
original tool (``-minCount 3``, ``-saveOutput``) and are parsed with
:mod:`argparse`.

The same loader reads back the output of :meth:`TrainingArgs.dump`
(see :meth:`TrainingArgs.from_dump`), so ``dump args`` output can be
turned into a configuration without losing any recognised option.
"""

from __future__ import annotations

import argparse
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field, fields, replace
from typing import Any, NoReturn, TextIO

from hornvecs.exceptions import ParseError, UsageError


TRAINING_COMMANDS: tuple[str, ...] = ("supervised", "skipgram", "cbow")
QUANTIZE_COMMAND: str = "quantize"

LOSSES: tuple[str, ...] = ("ns", "hs", "softmax", "ova")

MODEL_BY_COMMAND: dict[str, str] = {
    "supervised": "sup",
    "skipgram": "sg",
    "cbow": "cbow",
}
_COMMAND_BY_MODEL: dict[str, str] = {v: k for k, v in MODEL_BY_COMMAND.items()}

MODEL_FILE_FLAGS: tuple[str, ...] = (
    "dim", "ws", "epoch", "minCount", "neg", "wordNgrams", "loss", "model",
    "bucket", "minn", "maxn", "lrUpdateRate", "t",
)
"""Options recorded in a saved model file, in the order they are dumped."""


def _option(
    default: Any,
    flag: str,
    help: str,
    section: str,
) -> Any:
    return field(
        default=default,
        metadata={"flag": flag, "help": help, "section": section},
    )


# ---------------------------------------------------------------------------
# Configuration value object
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class TrainingArgs:
    """Every option understood by the training and quantize commands."""

    input: str = _option("", "input", "training file path", "mandatory")
    output: str = _option("", "output", "output file path", "mandatory")
    verbose: int = _option(2, "verbose", "verbosity level", "optional")

    min_count: int = _option(
        5, "minCount", "minimal number of word occurences", "dictionary")
    min_count_label: int = _option(
        0, "minCountLabel", "minimal number of label occurences", "dictionary")
    word_ngrams: int = _option(
        1, "wordNgrams", "max length of word ngram", "dictionary")
    bucket: int = _option(2000000, "bucket", "number of buckets", "dictionary")
    minn: int = _option(3, "minn", "min length of char ngram", "dictionary")
    maxn: int = _option(6, "maxn", "max length of char ngram", "dictionary")
    t: float = _option(0.0001, "t", "sampling threshold", "dictionary")
    label: str = _option("__label__", "label", "labels prefix", "dictionary")

    lr: float = _option(0.05, "lr", "learning rate", "training")
    lr_update_rate: int = _option(
        100, "lrUpdateRate", "change the rate of updates for the learning rate",
        "training")
    dim: int = _option(100, "dim", "size of word vectors", "training")
    ws: int = _option(5, "ws", "size of the context window", "training")
    epoch: int = _option(5, "epoch", "number of epochs", "training")
    neg: int = _option(5, "neg", "number of negatives sampled", "training")
    loss: str = _option("ns", "loss", "loss function {ns, hs, softmax, ova}",
                        "training")
    thread: int = _option(12, "thread", "number of threads", "training")
    pretrained_vectors: str = _option(
        "", "pretrainedVectors",
        "pretrained word vectors for supervised learning", "training")
    save_output: bool = _option(
        False, "saveOutput", "whether output params should be saved", "training")

    cutoff: int = _option(
        0, "cutoff", "number of words and ngrams to retain", "quantization")
    retrain: bool = _option(
        False, "retrain", "finetune embeddings if a cutoff is applied",
        "quantization")
    qnorm: bool = _option(
        False, "qnorm", "quantizing the norm separately", "quantization")
    qout: bool = _option(
        False, "qout", "quantizing the classifier", "quantization")
    dsub: int = _option(
        2, "dsub", "size of each sub-vector", "quantization")

    model: str = field(default="sg", metadata={"flag": "model"})
    """Model kind derived from the command: ``sup``, ``sg`` or ``cbow``."""

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def defaults_for(cls, command: str) -> TrainingArgs:
        """Return the defaults used by *command*.

        ``supervised`` switches to softmax loss, keeps every word,
        disables char n-grams and doubles the learning rate.
        """
        args = cls(model=MODEL_BY_COMMAND.get(command, "sg"))
        if command == "supervised":
            args = replace(
                args, loss="softmax", min_count=1, minn=0, maxn=0, lr=0.1,
            )
        return args

    @classmethod
    def parse(cls, args: Sequence[str]) -> TrainingArgs:
        """Parse a full invocation (``prog <command> -opt value ...``).

        Raises
        ------
        UsageError
            On unknown options, missing values, ``-h``/``-help``, or
            missing ``-input``/``-output`` paths.
        ParseError
            When a numeric option has a non-numeric value.
        """
        command = args[1]
        parsed = cls._parse_options(command, args[2:])
        if command == QUANTIZE_COMMAND:
            if not parsed.output:
                raise UsageError(command, "Empty output path.")
            if parsed.retrain and not parsed.input:
                raise UsageError(command, "Empty input path for -retrain.")
        elif not parsed.input or not parsed.output:
            raise UsageError(command, "Empty input or output path.")
        return parsed

    @classmethod
    def from_dump(cls, lines: Iterable[str]) -> TrainingArgs:
        """Rebuild a configuration from :meth:`dump` output.

        Each ``name value`` line is turned back into a ``-name value``
        option and fed to the same parser the training commands use.
        Paths are not required since dumps of loaded models omit them.
        """
        command = "skipgram"
        options: list[str] = []
        flags = {f.metadata["flag"]: f for f in fields(cls)}
        for line in lines:
            name, _, raw = line.strip().partition(" ")
            if not name:
                continue
            if name == "model":
                command = _COMMAND_BY_MODEL.get(raw, raw)
                continue
            spec = flags.get(name)
            if spec is None:
                raise ParseError(None, f"Unknown option in dump: {name}")
            if isinstance(spec.default, bool):
                if raw == "true":
                    options.append(f"-{name}")
            else:
                options.extend((f"-{name}", raw))
        return cls._parse_options(command, options)

    @classmethod
    def _parse_options(cls, command: str, options: Sequence[str]) -> TrainingArgs:
        defaults = cls.defaults_for(command)
        _require_known_flags(command, options, defaults)
        parser = _build_parser(command, defaults)
        namespace = parser.parse_args(list(options))
        if namespace.help:
            raise UsageError(command)
        values = {
            f.name: getattr(namespace, f.name)
            for f in fields(cls)
            if f.name != "model"
        }
        return replace(defaults, **values)

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def dump(self, stream: TextIO, flags: Iterable[str] | None = None) -> None:
        """Write one ``name value`` line per option to *stream*.

        *flags* restricts and orders the options written; by default
        every option is written in declaration order.
        """
        by_flag = {f.metadata["flag"]: f for f in fields(self)}
        for flag in by_flag if flags is None else flags:
            value = getattr(self, by_flag[flag].name)
            if isinstance(value, bool):
                value = "true" if value else "false"
            elif value == "":
                continue
            stream.write(f"{flag} {value}\n")


@dataclass(frozen=True, slots=True)
class ModelFileArgs:
    """The part of a configuration that a saved model file records.

    Learning rate, threads, verbosity and the label prefix are not
    stored, so a loaded model only reports :data:`MODEL_FILE_FLAGS`.
    Reading the dump back with :meth:`TrainingArgs.from_dump` fills the
    rest with the command defaults.
    """

    args: TrainingArgs

    def dump(self, stream: TextIO) -> None:
        self.args.dump(stream, MODEL_FILE_FLAGS)


# ---------------------------------------------------------------------------
# argparse plumbing
# ---------------------------------------------------------------------------

class _OptionParser(argparse.ArgumentParser):
    """``ArgumentParser`` that raises instead of printing and exiting."""

    def __init__(self, command: str, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.command = command

    def error(self, message: str) -> NoReturn:
        raise UsageError(self.command, message)


def _takes_value(defaults: TrainingArgs) -> dict[str, bool]:
    """Map every accepted ``-flag`` to whether it consumes a value."""
    flags = {"-h": False, "-help": False}
    for f in fields(defaults):
        if f.name != "model":
            default = getattr(defaults, f.name)
            flags[f"-{f.metadata['flag']}"] = not isinstance(default, bool)
    return flags


def _require_known_flags(
    command: str,
    options: Sequence[str],
    defaults: TrainingArgs,
) -> None:
    """Reject anything that is not an exact option name.

    argparse resolves unambiguous prefixes of single-dash options even
    with ``allow_abbrev=False``, so names are checked here first.
    """
    takes_value = _takes_value(defaults)
    tokens = iter(options)
    for token in tokens:
        if token not in takes_value:
            raise UsageError(command, f"Unknown argument: {token}")
        if takes_value[token]:
            next(tokens, None)


def _converter(command: str, flag: str, kind: type) -> Callable[[str], Any]:
    # ParseError is not a ValueError, so argparse lets it propagate.
    def convert(raw: str) -> Any:
        try:
            return kind(raw)
        except ValueError:
            raise ParseError(
                command, f"Invalid value for {flag}: {raw!r}",
            ) from None

    return convert


def _build_parser(command: str, defaults: TrainingArgs) -> _OptionParser:
    parser = _OptionParser(
        command,
        prog=f"hornvecs {command}",
        add_help=False,
        allow_abbrev=False,
    )
    parser.add_argument("-h", "-help", dest="help", action="store_true")
    for f in fields(defaults):
        if f.name == "model":
            continue
        flag = f"-{f.metadata['flag']}"
        default = getattr(defaults, f.name)
        if isinstance(default, bool):
            parser.add_argument(flag, dest=f.name, action="store_true")
        elif f.name == "loss":
            parser.add_argument(flag, dest=f.name, choices=LOSSES, default=default)
        else:
            parser.add_argument(
                flag,
                dest=f.name,
                type=_converter(command, flag, type(default)),
                default=default,
            )
    return parser
