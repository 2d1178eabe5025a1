from intcalc.runtime import render, run
from intcalc.tokenizer import LexError, tokenize, untokenize

for code in [
    "a = 5;",
    "a = -1;",
    "a = 1 + 1;",
    "a = -1 + 1;",
    "a = 1 + -1;",
    "a = 4 + 6 * 3;",
    "a = (4 + 6);",
    "a = (4+6) * 3;",
    "a = --5; b = +-3;",
    "a = 1; b= 2; c = a + b;",
    "var = (1 + 14 * (54*2));",
    "x = 007;",
    "x = 019;",
    "a = b + 1;",
    "a = 1 +;",
    "a = 1",
    "a = 1;\nb = a $ 2;",
]:
    print("=" * 10)
    print(f"code: {code!r}")
    try:
        tokens = tokenize(code)
    except LexError as e:
        print(e)
        continue

    print(f"tokens: {' '.join(str(t) for t in tokens)}")
    print(f"untokenized: {untokenize(tokens)}")

    execution = run(code)
    if execution.error is not None:
        print(execution.error)
    results_str = "\n".join(f"  {line}" for line in render(execution))
    print(f"output:\n{results_str}")
