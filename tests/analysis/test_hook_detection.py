"""
Tests for hook and advanced feature detection.

Verifies:
1. State and effect hooks set ``has_state_or_effects``.
2. Each distinct hook adds one warning.
3. ``React.useX`` calls are recognized.
4. Advanced imports from 'react' add warnings.
"""


def test_state_hook_sets_flag(extract):
  source = """
  import React, { useState } from 'react';
  const Counter = () => {
    const [count, setCount] = useState(0);
    const [step] = useState(1);
    return <button onClick={() => setCount(count + step)}>{count}</button>;
  };
  """
  info = extract(source)

  assert info.has_state_or_effects is True
  hook_warnings = [w for w in info.warnings if "React hook" in w]
  assert hook_warnings == ["Component uses React hook: useState. This may require manual conversion."]


def test_member_hook_and_non_state_hook(extract):
  source = """
  const Field = () => {
    const ref = React.useRef(null);
    const id = useId();
    return <input id={id} />;
  };
  """
  info = extract(source)

  assert info.has_state_or_effects is False
  assert any("useRef" in w for w in info.warnings)
  assert any("useId" in w for w in info.warnings)


def test_effect_hook(extract):
  source = """
  function Title({ text }) {
    useEffect(() => { document.title = text; }, [text]);
    return <h1>{text}</h1>;
  }
  """
  assert extract(source).has_state_or_effects is True


def test_advanced_features(extract):
  source = """
  import { memo, forwardRef, useContext } from 'react';
  const Panel = memo(({ title }) => <section>{title}</section>);
  """
  info = extract(source)

  advanced = [w for w in info.warnings if "advanced React feature" in w]
  assert advanced == [
    "Component uses advanced React feature: memo. Manual conversion may be required.",
    "Component uses advanced React feature: forwardRef. Manual conversion may be required.",
    "Component uses advanced React feature: useContext. Manual conversion may be required.",
  ]


def test_imports_from_other_modules_ignored(extract):
  source = """
  import { memo } from 'some-lib';
  const Panel = ({ title }) => <section>{title}</section>;
  """
  assert not any("advanced React feature" in w for w in extract(source).warnings)
