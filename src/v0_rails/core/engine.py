"""
Transformation Engine.

Runs the per-file pipeline: parse, extract a ``ComponentInfo``, build the ``IR``
and render the artifacts selected by the configuration. The engine does no I/O;
writing is the batch runner's job.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Tuple

from v0_rails.config import RuntimeConfig
from v0_rails.core.extractor import ComponentExtractor
from v0_rails.core.ir_generator import IRGenerator
from v0_rails.core.jsx.parser import SourceParser
from v0_rails.core.model import IR
from v0_rails.generators.component_preview import generate_component_preview
from v0_rails.generators.component_test import generate_component_test
from v0_rails.generators.erb_template import generate_erb_template
from v0_rails.generators.helper_module import generate_helper_module
from v0_rails.generators.ruby_class import generate_ruby_class
from v0_rails.generators.stimulus_controller import generate_stimulus_controller


@dataclass(frozen=True)
class Artifacts:
  """
  Generated file contents of one component. Optional artifacts are ``None`` when
  disabled or not applicable.
  """

  component: str
  template: str
  controller: Optional[str] = None
  test: Optional[str] = None
  preview: Optional[str] = None
  helper: Optional[str] = None

  def as_dict(self) -> Dict[str, str]:
    """Present artifacts keyed by kind (``component``, ``template``, ...)."""
    items = {
      "component": self.component,
      "template": self.template,
      "controller": self.controller,
      "test": self.test,
      "preview": self.preview,
      "helper": self.helper,
    }
    return {kind: text for kind, text in items.items() if text is not None}


class TransformEngine:
  """
  The per-file compilation unit.

  Args:
      config (RuntimeConfig, optional): Options of the run. Defaults apply if None.
  """

  def __init__(self, config: Optional[RuntimeConfig] = None):
    self.config = config or RuntimeConfig()
    self.extractor = ComponentExtractor(SourceParser())
    self.ir_generator = IRGenerator(detect_slots=self.config.detect_slots)

  def to_ir(self, source: str, path: str = "Component.jsx") -> IR:
    """
    Builds the IR of a source file.

    Args:
        source (str): Component source code.
        path (str): File path, used for the grammar and for naming.

    Returns:
        IR: The normalized component.

    Raises:
        ExtractionError: If the file contains no component.
    """
    info = self.extractor.extract_source(source, path=path)
    return self.ir_generator.generate(info)

  def render(self, ir: IR, namespace: Optional[str] = None) -> Artifacts:
    """
    Generates the artifacts of a component.

    Args:
        ir (IR): The component.
        namespace (str, optional): Ruby namespace; the configured one if None.

    Returns:
        Artifacts: Class and template, plus the optional artifacts enabled by
        the configuration.
    """
    ns = namespace or self.config.namespace
    wants_controller = self.config.generate_stimulus and (ir.needs_stimulus or ir.is_interactive)
    return Artifacts(
      component=generate_ruby_class(ir, ns),
      template=generate_erb_template(ir, ns, enhanced=self.config.enhanced_erb),
      controller=generate_stimulus_controller(ir) if wants_controller else None,
      test=generate_component_test(ir, ns) if self.config.generate_tests else None,
      preview=generate_component_preview(ir, ns) if self.config.generate_previews else None,
      helper=generate_helper_module(ir, ns) if self.config.generate_helpers else None,
    )

  def convert_file(self, path: Path, namespace: Optional[str] = None) -> Tuple[IR, Artifacts]:
    """
    Reads a UTF-8 source file and runs the whole pipeline on it.

    Args:
        path (Path): Source file.
        namespace (str, optional): Ruby namespace override.

    Returns:
        Tuple[IR, Artifacts]: The IR and the rendered artifacts.
    """
    with open(path, "rt", encoding="utf-8") as f:
      source = f.read()
    ir = self.to_ir(source, path=str(path))
    return ir, self.render(ir, namespace)
