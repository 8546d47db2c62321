from texrules.output.emitter import HEADER, RuleEmitter

__all__ = ["HEADER", "RuleEmitter"]
