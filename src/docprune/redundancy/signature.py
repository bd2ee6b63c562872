from __future__ import annotations

import libcst as cst

from docprune.redundancy.model import FunctionSignature, ParameterSignature

_EMPTY_MODULE = cst.Module(body=[])


def annotation_text(annotation: cst.Annotation | None) -> str | None:
    if annotation is None:
        return None
    expr = annotation.annotation
    if isinstance(expr, cst.SimpleString):
        # Forward reference: "Foo" is declared as Foo.
        evaluated = expr.evaluated_value
        if isinstance(evaluated, str):
            return evaluated.strip()
    return _EMPTY_MODULE.code_for_node(expr).strip()


def _parameter(param: cst.Param) -> ParameterSignature:
    return ParameterSignature(name=param.name.value, type=annotation_text(param.annotation))


def ordered_parameters(params: cst.Parameters) -> tuple[ParameterSignature, ...]:
    ordered: list[ParameterSignature] = []
    ordered.extend(_parameter(param) for param in params.posonly_params)
    ordered.extend(_parameter(param) for param in params.params)
    if isinstance(params.star_arg, cst.Param):
        ordered.append(_parameter(params.star_arg))
    ordered.extend(_parameter(param) for param in params.kwonly_params)
    if params.star_kwarg is not None:
        ordered.append(_parameter(params.star_kwarg))
    return tuple(ordered)


def signature_from_function(node: cst.FunctionDef) -> FunctionSignature:
    return FunctionSignature(
        return_type=annotation_text(node.returns),
        parameters=ordered_parameters(node.params),
    )
