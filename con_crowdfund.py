I = importlib

campaigns = Hash() # campaign_id -> campaign record (see create_campaign)
contributions = Hash(default_value=decimal('0.0')) # [campaign_id, account] -> recorded contribution
contributors = Hash() # [campaign_id, index] -> account, append-only in first-contribution order
campaign_count = Variable(default_value=0)
metadata = Hash()

# Set for the duration of every custody operation
busy = Variable(default_value=False)

# Standard XSC001 (Fungible Token) interface
token_interface = [
    I.Func('transfer_from', args=('amount', 'to', 'main_account')),
    I.Func('transfer', args=('amount', 'to')),
    I.Func('balance_of', args=('address',)),
]

# Events
CampaignCreated = LogEvent(
    event="campaign_created",
    params={
        "campaign_id": {'type':int, 'idx':False},
        "creator": {'type':str, 'idx':True},
        "title": {'type':str, 'idx':False},
        "goal": {'type':(int, float, decimal)},
        "deadline": {'type':str, 'idx':False}
    })

ContributionMade = LogEvent(
    event="contribution_made",
    params={
        "campaign_id": {'type':int, 'idx':False},
        "contributor": {'type':str, 'idx':True},
        "amount": {'type':(int, float, decimal)}
    })

FundsWithdrawn = LogEvent(
    event="funds_withdrawn",
    params={
        "campaign_id": {'type':int, 'idx':False},
        "creator": {'type':str, 'idx':True},
        "amount": {'type':(int, float, decimal)}
    })

RefundClaimed = LogEvent(
    event="refund_claimed",
    params={
        "campaign_id": {'type':int, 'idx':False},
        "contributor": {'type':str, 'idx':True},
        "amount": {'type':(int, float, decimal)}
    })

@construct
def seed():
    metadata['operator'] = ctx.caller
    metadata['token_contract'] = 'currency'
    campaign_count.set(0)
    busy.set(False)

@export
def change_metadata(key: str, value: Any):
    assert not busy.get(), 'INVALID_STATE: crowdfund contract is busy, cannot change metadata now.'
    assert ctx.caller == metadata['operator'], 'UNAUTHORIZED: only operator can set metadata!'

    if key == 'token_contract':
        # Custody of existing campaigns must stay in the token they were funded with
        assert campaign_count.get() == 0, 'INVALID_STATE: token contract is fixed once campaigns exist.'
        token_contract = I.import_module(value)
        assert I.enforce_interface(token_contract, token_interface), \
            'INVALID_ARGUMENT: token contract not XSC001-compliant.'

    metadata[key] = value

def get_campaign(campaign_id: int):
    assert isinstance(campaign_id, int) and campaign_id >= 0 and campaign_id < campaign_count.get(), \
        f'NOT_FOUND: campaign {campaign_id} does not exist.'
    return campaigns[campaign_id]

def enter():
    assert not busy.get(), 'INVALID_STATE: crowdfund contract is busy, please try again.'
    busy.set(True)

def leave():
    busy.set(False)

def custody_balance(token_contract: Any):
    balance = token_contract.balance_of(address=ctx.this)
    if balance is None: # Tokens may return None for an account never credited
        balance = decimal('0.0')
    return balance

def pay_out(amount: float, to: str):
    token_contract = I.import_module(metadata['token_contract'])
    balance_before = custody_balance(token_contract)

    token_contract.transfer(amount=amount, to=to)

    balance_after = custody_balance(token_contract)
    assert balance_before - balance_after == amount, \
        f'TRANSFER_FAILED: token did not move {amount} to {to}.'

@export
def create_campaign(title: str, description: str, goal: float, duration_days: int):
    assert len(title) > 0, 'INVALID_ARGUMENT: title must not be empty.'
    assert goal > decimal('0.0'), 'INVALID_ARGUMENT: goal must be positive.'
    assert duration_days > 0, 'INVALID_ARGUMENT: duration must be positive.'

    campaign_id = campaign_count.get()
    campaigns[campaign_id] = {
        "creator": ctx.caller,
        "title": title,
        "description": description,
        "goal": goal,
        "deadline": now + datetime.DAYS * duration_days,
        "amount_raised": decimal('0.0'), # Lifetime total, never decremented
        "goal_reached": False,
        "funds_withdrawn": False,
        "contributor_count": 0 # Length of the contributors append-log
    }
    campaign_count.set(campaign_id + 1)

    campaign = campaigns[campaign_id]

    CampaignCreated({
        "campaign_id": campaign_id,
        "creator": campaign["creator"],
        "title": campaign["title"],
        "goal": campaign["goal"],
        "deadline": str(campaign["deadline"])
    })
    return campaign_id

@export
def contribute(campaign_id: int, amount: float):
    enter()

    campaign = get_campaign(campaign_id)
    assert now < campaign["deadline"], 'INVALID_STATE: campaign has ended.'
    assert amount > decimal('0.0'), 'INVALID_ARGUMENT: contribution amount must be positive.'

    token_contract = I.import_module(metadata['token_contract'])

    # --- Interaction: pull the deposit into custody ---
    balance_before = custody_balance(token_contract)
    token_contract.transfer_from(amount=amount, to=ctx.this, main_account=ctx.caller)
    balance_after = custody_balance(token_contract)
    assert balance_after - balance_before == amount, \
        f'TRANSFER_FAILED: custody received {balance_after - balance_before} instead of {amount}.'

    # --- Effects ---
    recorded = contributions[campaign_id, ctx.caller]
    if recorded == decimal('0.0'):
        # A contributor refunded in full is appended again on re-contribution
        contributors[campaign_id, campaign["contributor_count"]] = ctx.caller
        campaign["contributor_count"] += 1
    contributions[campaign_id, ctx.caller] = recorded + amount

    campaign["amount_raised"] += amount
    if campaign["amount_raised"] >= campaign["goal"]:
        campaign["goal_reached"] = True
    campaigns[campaign_id] = campaign

    ContributionMade({
        "campaign_id": campaign_id,
        "contributor": ctx.caller,
        "amount": amount
    })

    leave()

@export
def withdraw(campaign_id: int):
    enter()

    campaign = get_campaign(campaign_id)
    assert ctx.caller == campaign["creator"], 'UNAUTHORIZED: only the campaign creator can withdraw.'
    assert now >= campaign["deadline"], 'INVALID_STATE: campaign is still active.'
    assert campaign["goal_reached"], 'INVALID_STATE: funding goal was not reached.'
    assert not campaign["funds_withdrawn"], 'INVALID_STATE: funds already withdrawn.'
    assert campaign["amount_raised"] > decimal('0.0'), 'INVALID_STATE: nothing to withdraw.'

    amount = campaign["amount_raised"]

    # --- Effects before interaction ---
    campaign["funds_withdrawn"] = True
    campaigns[campaign_id] = campaign

    # --- Interaction ---
    pay_out(amount=amount, to=campaign["creator"])

    FundsWithdrawn({
        "campaign_id": campaign_id,
        "creator": campaign["creator"],
        "amount": amount
    })

    leave()

@export
def refund(campaign_id: int):
    enter()

    campaign = get_campaign(campaign_id)
    assert now >= campaign["deadline"], 'INVALID_STATE: campaign is still active.'
    assert not campaign["goal_reached"], 'INVALID_STATE: funding goal was reached, refunds unavailable.'

    amount = contributions[campaign_id, ctx.caller]
    assert amount > decimal('0.0'), 'INVALID_STATE: no contribution to refund.'

    # --- Effects before interaction ---
    contributions[campaign_id, ctx.caller] = decimal('0.0')

    # --- Interaction ---
    pay_out(amount=amount, to=ctx.caller)

    RefundClaimed({
        "campaign_id": campaign_id,
        "contributor": ctx.caller,
        "amount": amount
    })

    leave()

# --- View functions ---
@export
def get_details(campaign_id: int):
    campaign = get_campaign(campaign_id)
    return {
        "creator": campaign["creator"],
        "title": campaign["title"],
        "description": campaign["description"],
        "goal": campaign["goal"],
        "deadline": campaign["deadline"],
        "amount_raised": campaign["amount_raised"],
        "goal_reached": campaign["goal_reached"],
        "funds_withdrawn": campaign["funds_withdrawn"]
    }

@export
def get_contribution(campaign_id: int, account: str):
    get_campaign(campaign_id)
    return contributions[campaign_id, account]

@export
def get_contributor_count(campaign_id: int):
    return get_campaign(campaign_id)["contributor_count"]

@export
def get_contributors(campaign_id: int):
    campaign = get_campaign(campaign_id)
    accounts = []
    for i in range(campaign["contributor_count"]):
        accounts.append(contributors[campaign_id, i])
    return accounts

@export
def get_campaign_count():
    return campaign_count.get()

@export
def is_active(campaign_id: int):
    return now < get_campaign(campaign_id)["deadline"]

@export
def get_status(campaign_id: int):
    campaign = get_campaign(campaign_id)
    if now < campaign["deadline"]:
        return "ACTIVE"
    if not campaign["goal_reached"]:
        return "FAILED"
    if campaign["funds_withdrawn"]:
        return "WITHDRAWN"
    return "SUCCESSFUL"
