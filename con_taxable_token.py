# Fee-on-transfer token: the receiver is credited less than the sender pays
balances = Hash(default_value=decimal('0.0'))
metadata = Hash()

@construct
def seed():
    initial_supply = decimal('1000000')
    balances[ctx.caller] = initial_supply
    metadata['token_name'] = "TAXABLE TOKEN"
    metadata['token_symbol'] = "TAX"
    metadata['tax_rate'] = decimal('0.05')
    metadata['operator'] = ctx.caller

def credit(to: str, amount: float):
    balances[to] += amount * (decimal('1.0') - metadata['tax_rate'])

@export
def transfer(amount: float, to: str):
    assert amount > decimal('0.0'), 'Cannot transfer zero or negative!'
    sender_bal = balances[ctx.caller]
    assert sender_bal >= amount, f'Transfer amount exceeds balance for sender {ctx.caller}!'

    balances[ctx.caller] = sender_bal - amount
    credit(to=to, amount=amount)

@export
def approve(amount: float, to: str):
    assert amount >= decimal('0.0'), 'Cannot approve negative!'
    balances[ctx.caller, to] = amount

@export
def transfer_from(amount: float, to: str, main_account: str):
    assert amount > decimal('0.0'), 'Cannot transfer zero or negative!'
    allowance = balances[main_account, ctx.caller]
    assert allowance >= amount, f'Transfer amount {amount} exceeds allowance {allowance}!'

    main_account_bal = balances[main_account]
    assert main_account_bal >= amount, f'Transfer amount {amount} exceeds balance {main_account_bal}!'

    balances[main_account, ctx.caller] = allowance - amount
    balances[main_account] = main_account_bal - amount
    credit(to=to, amount=amount)

@export
def balance_of(address: str):
    return balances[address]
