import argparse, os
from packbits import encode
from stats import summary

def main(argv=None):
    ap = argparse.ArgumentParser()
    ap.add_argument("--input", required=True, help="path to raw binary file")
    ap.add_argument("--output", required=True, help="path to PackBits output")
    args = ap.parse_args(argv)

    with open(args.input, "rb") as f:
        raw = f.read()
    encoded = encode(raw)

    os.makedirs(os.path.dirname(args.output) or ".", exist_ok=True)
    with open(args.output, "wb") as f:
        f.write(encoded)

    print(f"[encode] wrote {args.output}")
    print(f"[encode] {summary(len(raw), len(encoded))}")

if __name__ == "__main__":
    main()
