import argparse, os
from packbits import decode
from stats import summary

def main(argv=None):
    ap = argparse.ArgumentParser()
    ap.add_argument("--input", required=True, help="path to PackBits file")
    ap.add_argument("--output", required=True, help="path to raw output")
    ap.add_argument("--size", type=int, default=None, help="expected decoded size in bytes (checked)")
    args = ap.parse_args(argv)

    with open(args.input, "rb") as f:
        encoded = f.read()
    raw = decode(encoded, size=args.size)

    os.makedirs(os.path.dirname(args.output) or ".", exist_ok=True)
    with open(args.output, "wb") as f:
        f.write(raw)

    print(f"[decode] wrote {args.output}")
    print(f"[decode] {summary(len(raw), len(encoded))}")

if __name__ == "__main__":
    main()
