"""
CLMM position builder CLI

Examples:
  # 가격 2000, width 500 으로 양쪽 예치 포지션 생성
  clmm-builder position --price 2000 --width 500 --amount0 1000000 --amount1 2000000000

  # 기본 가격/width 격자 분석을 CSV 로 저장
  clmm-builder sweep --csv grid.csv
"""

import argparse
import logging
from fractions import Fraction
from typing import List, Optional

import pandas as pd

from .analysis import DEFAULT_PRICES, DEFAULT_WIDTHS, position_grid
from .config import settings
from .data.pool import SimulatedPool
from .errors import PositionBuilderError
from .math.sqrt_price_math import price_to_sqrt_price_x96, sqrt_price_x96_to_price
from .position_builder import create_position

# 시뮬레이션 풀의 토큰 주소
TOKEN_A = "0x" + "a" * 40
TOKEN_B = "0x" + "b" * 40


def _parse_prices(value: str) -> List[Fraction]:
    return [Fraction(p.strip()) for p in value.split(",")]


def _parse_widths(value: str) -> List[int]:
    return [int(w.strip()) for w in value.split(",")]


def run_position(args: argparse.Namespace) -> int:
    """시뮬레이션 풀에 포지션 하나를 생성하고 출력"""
    pool = SimulatedPool(TOKEN_A, TOKEN_B, fee=args.fee)
    pool.initialize(price_to_sqrt_price_x96(args.price, args.decimals0, args.decimals1))
    pool.fund(args.recipient, args.amount0, args.amount1)

    result = create_position(pool, args.width, args.amount0, args.amount1, recipient=args.recipient)

    price_lower = sqrt_price_x96_to_price(result.sqrt_price_lower_x96, args.decimals0, args.decimals1)
    price_upper = sqrt_price_x96_to_price(result.sqrt_price_upper_x96, args.decimals0, args.decimals1)

    print(f"\n📊 Position (fee {args.fee}, tick spacing {pool.tick_spacing})")
    print(f"   틱 범위: [{result.tick_lower}, {result.tick_upper}]")
    print(f"   가격 범위: {float(price_lower):.8g} ~ {float(price_upper):.8g}")
    print(f"   width: {float(result.width):.4f} (요청: {args.width})")
    print(f"   유동성: {result.liquidity:,}")
    print(f"\n💰 예치 수량:")
    print(f"   amount0: {result.amount0_owed:,} / {args.amount0:,}")
    print(f"   amount1: {result.amount1_owed:,} / {args.amount1:,}")
    return 0


def run_sweep(args: argparse.Namespace) -> int:
    """가격 × width 격자 분석"""
    df = position_grid(
        prices=args.prices,
        widths=args.widths,
        amount0=args.amount0,
        amount1=args.amount1,
        fee_tier=args.fee,
    )

    if args.csv:
        df.to_csv(args.csv, index=False)
        print(f"✅ 저장: {args.csv} ({len(df)} rows)")
    else:
        with pd.option_context("display.max_rows", None, "display.width", 200):
            print(df.to_string(index=False))

    failed = df["error"].notna().sum()
    if failed:
        print(f"\n⚠️  {failed}개 조합 계산 불가")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="clmm-builder",
        description="집중 유동성 포지션 범위/유동성 계산",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    position = subparsers.add_parser("position", help="시뮬레이션 풀에 포지션 생성")
    position.add_argument("--price", type=Fraction, default=Fraction(1), help="현재 가격 (token1/token0)")
    position.add_argument("--width", type=int, required=True, help="범위 width (0 ~ 9999)")
    position.add_argument("--amount0", type=int, default=0, help="token0 예산 (최소 단위)")
    position.add_argument("--amount1", type=int, default=0, help="token1 예산 (최소 단위)")
    position.add_argument("--fee", type=int, default=settings.FEE_TIER, help="수수료 티어")
    position.add_argument("--decimals0", type=int, default=settings.TOKEN0_DECIMALS, help="token0 소수점 자릿수")
    position.add_argument("--decimals1", type=int, default=settings.TOKEN1_DECIMALS, help="token1 소수점 자릿수")
    position.add_argument("--recipient", type=str, default=settings.RECIPIENT, help="포지션 소유자")
    position.set_defaults(func=run_position)

    sweep = subparsers.add_parser("sweep", help="가격 × width 격자 분석")
    sweep.add_argument("--prices", type=_parse_prices, default=DEFAULT_PRICES, help="가격 목록 (쉼표 구분, 예: 2/11,1,7)")
    sweep.add_argument("--widths", type=_parse_widths, default=DEFAULT_WIDTHS, help="width 목록 (쉼표 구분)")
    sweep.add_argument("--amount0", type=int, default=10_000, help="token0 예산")
    sweep.add_argument("--amount1", type=int, default=15_000, help="token1 예산")
    sweep.add_argument("--fee", type=int, default=settings.FEE_TIER, help="수수료 티어")
    sweep.add_argument("--csv", type=str, help="CSV 파일 경로 (미지정시 출력)")
    sweep.set_defaults(func=run_sweep)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        return args.func(args)
    except (PositionBuilderError, ValueError) as e:
        print(f"❌ {type(e).__name__}: {e}")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
