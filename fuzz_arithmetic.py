import random
import re
import string
import warnings

from intcalc.runtime import run

warnings.filterwarnings("ignore")


def eval_py(code: str) -> int | str:
    try:
        return eval(code)
    except Exception as e:
        return str(e)


def eval_my(code: str) -> int | str:
    execution = run(f"x = {code};")
    if execution.failed:
        return execution.diagnostics[0]
    return execution.variables["x"]


if __name__ == "__main__":
    alphabet = string.digits + "()+-* "

    def generate(length: int) -> str:
        return "".join(random.choices(alphabet, k=length))

    while True:
        code = generate(10)

        if re.findall(r"\*\s*\*", code):
            continue  # avoid generating powers (10**4)

        if re.findall(r"\b0\d", code):
            continue  # leading zeros are rejected by python and only partially by us

        res_py = eval_py(code)
        res_my = eval_my(code)
        if isinstance(res_py, int) and isinstance(res_my, int) and res_py == res_my:
            continue
        if isinstance(res_py, str) and isinstance(res_my, str):
            continue
        print(f"{code!r}\npy: {res_py}\nmy: {res_my}\n\n")
