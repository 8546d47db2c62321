"""texrules - make-rule synthesis for LaTeX document trees."""

__version__ = "0.1.0"

from texrules.config import TexRulesConfig, load_config
from texrules.output import RuleEmitter
from texrules.runner import RuleDestinationError, run_executor, write_rules
from texrules.synth import BuildGraphSynthesizer, SynthesisSession, synthesize

__all__ = [
    "BuildGraphSynthesizer",
    "RuleDestinationError",
    "RuleEmitter",
    "SynthesisSession",
    "TexRulesConfig",
    "load_config",
    "run_executor",
    "synthesize",
    "write_rules",
]
