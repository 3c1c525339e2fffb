balances = Hash(default_value=decimal('0.0'))

@construct
def seed():
    balances[ctx.caller] = decimal('1000000')

@export
def transfer(amount: float, to: str):
    assert amount > decimal('0.0'), 'Cannot transfer zero or negative!'
    sender_bal = balances[ctx.caller]
    assert sender_bal >= amount, f'Transfer amount exceeds balance for sender {ctx.caller}!'

    balances[ctx.caller] = sender_bal - amount
    balances[to] += amount

@export
def approve(amount: float, to: str):
    assert amount >= decimal('0.0'), 'Cannot approve negative!' # 0 clears the approval
    balances[ctx.caller, to] = amount

@export
def transfer_from(amount: float, to: str, main_account: str):
    assert amount > decimal('0.0'), 'Cannot transfer zero or negative!'
    spender = ctx.caller

    allowance = balances[main_account, spender]
    assert allowance >= amount, f'Transfer amount {amount} exceeds allowance {allowance}!'

    main_account_bal = balances[main_account]
    assert main_account_bal >= amount, f'Transfer amount {amount} exceeds balance {main_account_bal}!'

    balances[main_account, spender] = allowance - amount
    balances[main_account] = main_account_bal - amount
    balances[to] += amount

@export
def balance_of(address: str):
    return balances[address]
