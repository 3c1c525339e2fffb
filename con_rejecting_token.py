# Token whose payouts to blocked recipients either revert or are silently dropped
balances = Hash(default_value=decimal('0.0'))
blocked = Hash(default_value=False)
metadata = Hash()

@construct
def seed():
    balances[ctx.caller] = decimal('1000000')
    metadata['operator'] = ctx.caller
    metadata['reject_mode'] = 'revert' # 'revert' or 'silent'

@export
def configure(recipient: str, reject: bool, mode: str):
    assert ctx.caller == metadata['operator'], 'Only operator can configure rejections.'
    assert mode in ['revert', 'silent'], 'Unknown reject mode.'
    blocked[recipient] = reject
    metadata['reject_mode'] = mode

@export
def transfer(amount: float, to: str):
    assert amount > decimal('0.0'), 'Cannot transfer zero or negative!'
    if blocked[to]:
        assert metadata['reject_mode'] != 'revert', f'Recipient {to} rejected the transfer!'
        return False

    sender_bal = balances[ctx.caller]
    assert sender_bal >= amount, f'Transfer amount exceeds balance for sender {ctx.caller}!'
    balances[ctx.caller] = sender_bal - amount
    balances[to] += amount
    return True

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
    balances[to] += amount
    return True

@export
def balance_of(address: str):
    return balances[address]
