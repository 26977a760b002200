import numpy as np
import pytest

from stock_sim.errors import InvalidParameterError
from stock_sim.price import PriceSimulator, SimulationParams
from stock_sim.stock import Stock, build_stock


def test_explicit_history():
    prices = [10.0, 11.0, 10.5]
    stock = build_stock("A", "Acme", history=prices)
    assert stock.symbol == "A"
    assert stock.name == "Acme"
    assert stock.history.tolist() == prices
    assert stock.horizon is None
    assert not stock.history.flags.writeable
    prices[0] = 0.0
    assert stock.history[0] == 10.0


def test_explicit_history_dataframe():
    df = build_stock("A", history=[1, 2, 3]).to_dataframe()
    assert list(df.columns) == ["step", "price"]
    assert df["step"].tolist() == [0, 1, 2]
    assert df["price"].tolist() == [1, 2, 3]


def test_generated_history_matches_simulator():
    params = SimulationParams(drift=0.1, volatility=0.3, amount_of_years=2.0, number_of_steps=100)
    stock = build_stock("B", "Beta", seed=7, initial_price=50.0, params=params)
    expected = PriceSimulator(7).generate(50.0, params)
    assert np.array_equal(stock.history, expected)
    assert stock.horizon == 2.0


def test_generated_history_defaults():
    stock = build_stock("C", seed=1, initial_price=100.0)
    assert len(stock.history) == 366
    assert stock.history[0] == 100.0


def test_generated_history_dataframe():
    stock = build_stock("C", seed=1, initial_price=100.0)
    df = stock.to_dataframe()
    assert list(df.columns) == ["step", "time", "price"]
    assert len(df) == 366
    assert df["time"].iloc[0] == 0.0
    assert df["time"].iloc[-1] == 1.0
    assert df["price"].iloc[0] == 100.0


def test_generated_integer_history():
    stock = build_stock("D", seed=3, initial_price=500, numeric=np.int64)
    assert stock.history.dtype == np.int64


def test_history_and_initial_price_conflict():
    with pytest.raises(InvalidParameterError):
        build_stock("A", history=[1.0], seed=1, initial_price=1.0)


def test_generation_requires_seed():
    with pytest.raises(InvalidParameterError):
        build_stock("A", initial_price=100.0)


def test_history_must_be_one_dimensional():
    with pytest.raises(InvalidParameterError):
        build_stock("A", history=[[1.0, 2.0], [3.0, 4.0]])


@pytest.mark.parametrize("symbol", ["", "AB", 1, None])
def test_symbol_must_be_single_character(symbol):
    with pytest.raises(InvalidParameterError):
        Stock(symbol)


def test_empty_stock():
    stock = build_stock("Z")
    assert stock.history is None
    df = stock.to_dataframe()
    assert df.empty
    assert list(df.columns) == ["step", "price"]
    assert "Z" in repr(stock)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"history": [1.0, 2.0], "seed": 1},
        {"history": [1.0, 2.0], "params": SimulationParams()},
        {"history": [1.0, 2.0], "numeric": np.int64},
        {"seed": 1},
        {"numeric": float},
    ],
)
def test_simulation_arguments_need_initial_price(kwargs):
    with pytest.raises(InvalidParameterError):
        build_stock("A", **kwargs)
