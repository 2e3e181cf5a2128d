"""Usage blocks for the global command list and every command.

Texts are rendered verbatim on stderr by the error boundary whenever a
:class:`~hornvecs.exceptions.UsageError` is raised.
"""

from __future__ import annotations

from dataclasses import fields

from hornvecs.core.args import QUANTIZE_COMMAND, TRAINING_COMMANDS, TrainingArgs


GLOBAL_USAGE = """\
usage: hornvecs <command> <args>

The commands supported by hornvecs are:

  supervised              train a supervised classifier
  quantize                quantize a model to reduce the memory usage
  test                    evaluate a supervised classifier
  predict                 predict most likely labels
  predict-prob            predict most likely labels with probabilities
  skipgram                train a skipgram model
  cbow                    train a cbow model
  print-word-vectors      print word vectors given a trained model
  print-sentence-vectors  print sentence vectors given a trained model
  print-ngrams            print ngrams given a trained model and word
  nn                      query for nearest neighbors
  analogies               query for analogies
  dump                    dump arguments,dictionary,input/output vectors
"""

_EVALUATION_ARGS = """\
  <model>      model filename
  <test-data>  test data filename (if -, read from stdin)
  <k>          (optional; 1 by default) predict top k labels
  <th>         (optional; 0.0 by default) probability threshold
"""

_QUERY_ARGS = """\
  <model>      model filename
  <k>          (optional; 10 by default) predict top k labels
"""

_COMMAND_USAGE: dict[str, str] = {
    "test": (
        "usage: hornvecs test <model> <test-data> [<k>] [<th>]\n\n"
        + _EVALUATION_ARGS
    ),
    "predict": (
        "usage: hornvecs predict[-prob] <model> <test-data> [<k>] [<th>]\n\n"
        + _EVALUATION_ARGS
    ),
    "print-word-vectors": (
        "usage: hornvecs print-word-vectors <model>\n\n"
        "  <model>      model filename\n"
    ),
    "print-sentence-vectors": (
        "usage: hornvecs print-sentence-vectors <model>\n\n"
        "  <model>      model filename\n"
    ),
    "print-ngrams": (
        "usage: hornvecs print-ngrams <model> <word>\n\n"
        "  <model>      model filename\n"
        "  <word>       word to print\n"
    ),
    "nn": "usage: hornvecs nn <model> <k>\n\n" + _QUERY_ARGS,
    "analogies": "usage: hornvecs analogies <model> <k>\n\n" + _QUERY_ARGS,
    "dump": (
        "usage: hornvecs dump <model> <option>\n\n"
        "  <model>      model filename\n"
        "  <option>     option from args,dict,input,output\n"
    ),
}
_COMMAND_USAGE["predict-prob"] = _COMMAND_USAGE["predict"]

_SECTION_TITLES: tuple[tuple[str, str], ...] = (
    ("mandatory", "The following arguments are mandatory:"),
    ("optional", "The following arguments are optional:"),
    ("dictionary", "The following arguments for the dictionary are optional:"),
    ("training", "The following arguments for training are optional:"),
    ("quantization", "The following arguments for quantization are optional:"),
)


def options_help(command: str) -> str:
    """Describe every training/quantize option with *command*'s defaults."""
    defaults = TrainingArgs.defaults_for(command)
    lines: list[str] = []
    for section, title in _SECTION_TITLES:
        lines.append("")
        lines.append(title)
        for f in fields(defaults):
            if f.metadata.get("section") != section:
                continue
            flag = f"-{f.metadata['flag']}"
            text = f.metadata["help"]
            default = getattr(defaults, f.name)
            if section != "mandatory":
                text = f"{text} [{_render_default(default)}]"
            lines.append(f"  {flag:<20}{text}")
    return "\n".join(lines) + "\n"


def _render_default(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def usage_for(command: str | None) -> str:
    """Return the usage block for *command*, or the global usage."""
    if command is None:
        return GLOBAL_USAGE
    if command == QUANTIZE_COMMAND:
        return "usage: hornvecs quantize <args>\n" + options_help(command)
    if command in TRAINING_COMMANDS:
        return f"usage: hornvecs {command} <args>\n" + options_help(command)
    return _COMMAND_USAGE.get(command, GLOBAL_USAGE)
